"""User and invitation domain service."""

import secrets
from datetime import datetime, timedelta, UTC
from typing import Optional

import structlog

from fundtrack.database.base import Database
from fundtrack.domain import aggregates
from fundtrack.domain.cache import ViewState
from fundtrack.domain.entities import Invitation, Role, User
from fundtrack.domain.errors import AuthorizationError, ValidationError, not_signed_in
from fundtrack.domain.identity import IdentityProvider, is_administrator
from fundtrack.domain.payloads import NewUser, UserPatch

logger = structlog.get_logger(__name__)

INVITATION_TTL = timedelta(days=7)


class UserService:
    """Service for user profiles and invitations.

    Managing other users (roles, activation, invitations) is reserved for
    administrators.
    """

    def __init__(self, db: Database, view_state: ViewState, identity: IdentityProvider):
        self.db = db
        self.users = view_state.users
        self.invitations = view_state.invitations
        self.identity = identity

    async def current_user(self) -> Optional[User]:
        """Load the profile of the signed-in identity, if any."""
        user_id = self.identity.current_identity()
        if user_id is None:
            return None
        return await self.db.get_user(user_id)

    async def load_users(self) -> list[User]:
        self.users.loading = True
        try:
            users = await self.db.list_users()
        finally:
            self.users.loading = False
        self.users.replace_all(users)
        return users

    async def load_invitations(self) -> list[Invitation]:
        self.invitations.loading = True
        try:
            invitations = await self.db.list_invitations()
        finally:
            self.invitations.loading = False
        self.invitations.replace_all(invitations)
        return invitations

    def users_by_role(self, role: Role) -> list[User]:
        return aggregates.users_by_role(self.users.items, role)

    def active_users(self) -> list[User]:
        return aggregates.active_users(self.users.items)

    def pending_invitations(self) -> list[Invitation]:
        return aggregates.pending_invitations(self.invitations.items)

    async def register_user(
        self,
        form: NewUser,
        user_id: Optional[int] = None,
        invitation_token: Optional[str] = None,
    ) -> User:
        """Create the profile for a newly authenticated identity.

        When an invitation token is given, it must be valid; the invited role
        is used and the invitation is marked as used.

        Raises:
            ValidationError: If the data or the invitation is invalid
        """
        if not form.email or "@" not in form.email:
            raise ValidationError("A valid email address is required")
        if not form.first_name or not form.first_name.strip():
            raise ValidationError("First name is required")

        invitation = None
        if invitation_token is not None:
            invitation = await self.verify_invitation(invitation_token)
            if invitation is None:
                raise ValidationError("Invitation is invalid or has expired")
            if invitation.email.lower() != form.email.lower():
                raise ValidationError("Invitation was issued for a different email address")
            form = NewUser(
                email=form.email,
                first_name=form.first_name,
                last_name=form.last_name,
                role=invitation.role,
            )

        user = await self.db.create_user(form, user_id=user_id)
        self.users.append(user)
        if invitation is not None:
            await self.mark_invitation_used(invitation.id)
        logger.info("user_registered", user_id=user.id, role=user.role.value)
        return user

    async def change_role(self, user_id: int, role: Role) -> User:
        await self._require_administrator()
        return await self._update(user_id, UserPatch(role=role))

    async def activate_user(self, user_id: int) -> User:
        await self._require_administrator()
        return await self._update(user_id, UserPatch(active=True))

    async def deactivate_user(self, user_id: int) -> User:
        admin = await self._require_administrator()
        if admin.id == user_id:
            raise ValidationError("You cannot deactivate your own account")
        return await self._update(user_id, UserPatch(active=False))

    async def update_profile(self, patch: UserPatch) -> User:
        """Let the signed-in user change their own name or avatar."""
        user_id = self.identity.current_identity()
        if user_id is None:
            raise AuthorizationError(not_signed_in())
        if patch.role is not None or patch.active is not None:
            raise AuthorizationError("Role and status can only be changed by an administrator")
        return await self._update(user_id, patch)

    async def create_invitation(self, email: str, role: Role) -> Invitation:
        """Invite a new user with a role; the token is valid for seven days."""
        admin = await self._require_administrator()
        if not email or "@" not in email:
            raise ValidationError("A valid email address is required")

        invitation = await self.db.create_invitation(
            email=email.strip(),
            role=role,
            token=secrets.token_urlsafe(24),
            invited_by=admin.id,
            expires_at=datetime.now(UTC) + INVITATION_TTL,
        )
        self.invitations.prepend(invitation)
        logger.info("invitation_created", invitation_id=invitation.id, role=role.value)
        return invitation

    async def verify_invitation(self, token: str) -> Optional[Invitation]:
        """Return the invitation for ``token`` if it is unused and not expired."""
        invitation = await self.db.get_invitation_by_token(token)
        if invitation is None or not aggregates.pending_invitations([invitation]):
            return None
        return invitation

    async def mark_invitation_used(self, invitation_id: int) -> Invitation:
        invitation = await self.db.mark_invitation_used(invitation_id)
        self.invitations.replace(invitation)
        return invitation

    async def delete_invitation(self, invitation_id: int) -> None:
        await self._require_administrator()
        await self.db.delete_invitation(invitation_id)
        self.invitations.remove(invitation_id)

    async def _update(self, user_id: int, patch: UserPatch) -> User:
        user = await self.db.update_user(user_id, patch)
        self.users.replace(user)
        return user

    async def _require_administrator(self) -> User:
        user = await self.current_user()
        if user is None:
            raise AuthorizationError(not_signed_in())
        if not is_administrator(user):
            raise AuthorizationError("Only administrators can manage users")
        return user
