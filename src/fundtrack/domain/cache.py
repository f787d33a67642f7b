"""In-process view-state caches.

Each cache holds the last loaded snapshot of one entity type. Loads replace
the whole collection; mutations splice a single element in, out of, or
within the collection by identifier so callers never need to reload after a
local change. There is no locking: concurrent loads are not coordinated and
the last one to finish wins.
"""

from typing import Callable, Generic, Iterable, Optional, TypeVar

from fundtrack.domain.entities import (
    Account,
    Category,
    IncomeRecord,
    Invitation,
    Purchase,
    SystemConfig,
    User,
)

T = TypeVar("T")

Subscriber = Callable[[tuple], None]


class ViewStateCache(Generic[T]):
    """Snapshot of one entity collection with subscribe/notify semantics."""

    def __init__(self, name: str):
        self.name = name
        self._items: list[T] = []
        self._subscribers: list[Subscriber] = []
        self.loading = False

    @property
    def items(self) -> tuple[T, ...]:
        """Current snapshot (immutable copy)."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self.items)

    def get(self, item_id: int) -> Optional[T]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def replace_all(self, items: Iterable[T]) -> None:
        self._items = list(items)
        self._notify()

    def prepend(self, item: T) -> None:
        self._items.insert(0, item)
        self._notify()

    def append(self, item: T) -> None:
        self._items.append(item)
        self._notify()

    def replace(self, item: T) -> bool:
        """Replace the element with the same id.

        Returns False (and leaves the cache alone) when the element is not
        cached, e.g. because it was filtered out of the last load.
        """
        for index, existing in enumerate(self._items):
            if existing.id == item.id:
                self._items[index] = item
                self._notify()
                return True
        return False

    def remove(self, item_id: int) -> bool:
        for index, existing in enumerate(self._items):
            if existing.id == item_id:
                del self._items[index]
                self._notify()
                return True
        return False

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback receiving each new snapshot.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.items
        for callback in list(self._subscribers):
            callback(snapshot)


class ViewState:
    """All caches belonging to one session scope.

    Services receive this object (or one of its caches) explicitly instead of
    reaching for process-wide globals.
    """

    def __init__(self):
        self.purchases: ViewStateCache[Purchase] = ViewStateCache("purchases")
        self.income: ViewStateCache[IncomeRecord] = ViewStateCache("income")
        self.accounts: ViewStateCache[Account] = ViewStateCache("accounts")
        self.purchase_categories: ViewStateCache[Category] = ViewStateCache("purchase_categories")
        self.income_categories: ViewStateCache[Category] = ViewStateCache("income_categories")
        self.users: ViewStateCache[User] = ViewStateCache("users")
        self.invitations: ViewStateCache[Invitation] = ViewStateCache("invitations")
        self.config: Optional[SystemConfig] = None
