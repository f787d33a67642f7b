"""Identity provider interface and role checks."""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

from fundtrack.domain.entities import Role, User

APPROVER_ROLES = frozenset({Role.ADMINISTRATOR, Role.TREASURER})
INCOME_ROLES = frozenset({Role.ADMINISTRATOR, Role.TREASURER})


class IdentityProvider(ABC):
    """Source of the currently authenticated identity."""

    @abstractmethod
    def current_identity(self) -> Optional[int]:
        """Return the signed-in user ID, or None."""
        pass


class SessionIdentityProvider(IdentityProvider):
    """Identity held for the lifetime of one session.

    Credentials are verified elsewhere; this object only tracks which user is
    signed in and tells listeners when that changes.
    """

    def __init__(self, user_id: Optional[int] = None):
        self._user_id = user_id
        self._listeners: list[Callable[[Optional[int]], None]] = []

    def current_identity(self) -> Optional[int]:
        return self._user_id

    def sign_in(self, user_id: int) -> None:
        self._user_id = user_id
        self._emit()

    def sign_out(self) -> None:
        self._user_id = None
        self._emit()

    def on_change(self, listener: Callable[[Optional[int]], None]) -> None:
        self._listeners.append(listener)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self._user_id)


def has_role(user: Optional[User], roles: Role | Iterable[Role]) -> bool:
    """Check whether an active user holds one of ``roles``."""
    if user is None or not user.active:
        return False
    if isinstance(roles, Role):
        roles = (roles,)
    return user.role in set(roles)


def can_approve_purchases(user: Optional[User]) -> bool:
    return has_role(user, APPROVER_ROLES)


def can_register_income(user: Optional[User]) -> bool:
    return has_role(user, INCOME_ROLES)


def is_administrator(user: Optional[User]) -> bool:
    return has_role(user, Role.ADMINISTRATOR)
