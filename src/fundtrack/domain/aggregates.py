"""Derived views over cache snapshots.

Everything here is a pure function of the collection it is given; callers
recompute on demand instead of storing totals.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Iterable, Optional

from fundtrack.domain.entities import (
    Account,
    Category,
    IncomeRecord,
    Invitation,
    Purchase,
    PurchaseState,
    Role,
    User,
)
from fundtrack.domain.payloads import IncomeFilters, PurchaseFilters

ZERO = Decimal("0")


def purchases_in_state(purchases: Iterable[Purchase], state: PurchaseState) -> list[Purchase]:
    return [p for p in purchases if p.state == state]


def pending_purchases(purchases: Iterable[Purchase]) -> list[Purchase]:
    return purchases_in_state(purchases, PurchaseState.PENDING)


def approved_purchases(purchases: Iterable[Purchase]) -> list[Purchase]:
    return purchases_in_state(purchases, PurchaseState.APPROVED)


def rejected_purchases(purchases: Iterable[Purchase]) -> list[Purchase]:
    return purchases_in_state(purchases, PurchaseState.REJECTED)


def my_rejected_purchases(purchases: Iterable[Purchase], user_id: Optional[int]) -> list[Purchase]:
    """Rejected purchases submitted by ``user_id`` (for self-notification)."""
    if user_id is None:
        return []
    return [p for p in rejected_purchases(purchases) if p.submitted_by == user_id]


def total_approved_amount(purchases: Iterable[Purchase]) -> Decimal:
    return sum((p.amount for p in approved_purchases(purchases)), ZERO)


def total_income(records: Iterable[IncomeRecord]) -> Decimal:
    return sum((r.amount for r in records), ZERO)


def active_accounts(accounts: Iterable[Account]) -> list[Account]:
    return [a for a in accounts if a.active]


def total_balance(accounts: Iterable[Account]) -> Decimal:
    """Sum of balances of active accounts."""
    return sum((a.balance for a in active_accounts(accounts)), ZERO)


def active_categories(categories: Iterable[Category]) -> list[Category]:
    return [c for c in categories if c.active]


def active_users(users: Iterable[User]) -> list[User]:
    return [u for u in users if u.active]


def users_by_role(users: Iterable[User], role: Role) -> list[User]:
    return [u for u in users if u.role == role]


def pending_invitations(
    invitations: Iterable[Invitation], now: Optional[datetime] = None
) -> list[Invitation]:
    """Invitations that are unused and not yet expired."""
    now = now or datetime.now(UTC)
    return [i for i in invitations if not i.used and _as_utc(i.expires_at) > now]


def filter_purchases(
    purchases: Iterable[Purchase], filters: PurchaseFilters, user_id: Optional[int] = None
) -> list[Purchase]:
    """Apply purchase filters in memory, with the same rules as the store.

    ``mine_only`` is ignored when there is no signed-in user.
    """
    result = []
    for p in purchases:
        if filters.state is not None and p.state != filters.state:
            continue
        if filters.category_id is not None and p.category_id != filters.category_id:
            continue
        if filters.account_id is not None and p.account_id != filters.account_id:
            continue
        if filters.start_date is not None and p.purchase_date < filters.start_date:
            continue
        if filters.end_date is not None and p.purchase_date > filters.end_date:
            continue
        if filters.mine_only and user_id is not None and p.submitted_by != user_id:
            continue
        result.append(p)
    return result


def filter_income(records: Iterable[IncomeRecord], filters: IncomeFilters) -> list[IncomeRecord]:
    result = []
    for r in records:
        if filters.category_id is not None and r.category_id != filters.category_id:
            continue
        if filters.account_id is not None and r.account_id != filters.account_id:
            continue
        if filters.start_date is not None and r.deposit_date < filters.start_date:
            continue
        if filters.end_date is not None and r.deposit_date > filters.end_date:
            continue
        result.append(r)
    return result


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
