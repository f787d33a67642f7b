"""Dashboard summary domain service."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from fundtrack.domain import aggregates
from fundtrack.domain.account import AccountService
from fundtrack.domain.entities import Account, IncomeRecord, Purchase, PurchaseState
from fundtrack.domain.income import IncomeLedgerService
from fundtrack.domain.payloads import IncomeFilters, PurchaseFilters
from fundtrack.domain.purchase import PurchaseWorkflowService

RECENT_MOVEMENTS = 10


@dataclass(frozen=True)
class CategoryTotal:
    """Total amount for one category."""

    category: str
    total: Decimal


@dataclass(frozen=True)
class AccountBalance:
    """Balance of one active account."""

    account: str
    balance: Decimal
    color: str


@dataclass(frozen=True)
class Movement:
    """A purchase or income entry in the recent movements list."""

    kind: str
    id: int
    description: str
    amount: Decimal
    date: date
    category: Optional[str]
    created_at: datetime
    state: Optional[PurchaseState] = None


@dataclass(frozen=True)
class DashboardSummary:
    """Financial overview shown on the dashboard."""

    total_balance: Decimal
    income_this_month: Decimal
    spending_this_month: Decimal
    pending_purchases: int
    income_by_category: tuple[CategoryTotal, ...]
    spending_by_category: tuple[CategoryTotal, ...]
    balances_by_account: tuple[AccountBalance, ...]
    recent_movements: tuple[Movement, ...]


def _same_month(value: date, today: date) -> bool:
    return value.year == today.year and value.month == today.month


def _category_totals(entries: Iterable[Purchase | IncomeRecord]) -> tuple[CategoryTotal, ...]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for entry in entries:
        name = entry.category.name if entry.category is not None else f"Category {entry.category_id}"
        totals[name] += entry.amount
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return tuple(CategoryTotal(category=name, total=total) for name, total in ordered)


def _movements(
    purchases: Sequence[Purchase], income: Sequence[IncomeRecord], limit: int
) -> tuple[Movement, ...]:
    movements = [
        Movement(
            kind="purchase",
            id=p.id,
            description=p.description,
            amount=p.amount,
            date=p.purchase_date,
            category=p.category.name if p.category is not None else None,
            created_at=p.created_at,
            state=p.state,
        )
        for p in purchases
    ]
    movements.extend(
        Movement(
            kind="income",
            id=r.id,
            description=r.description,
            amount=r.amount,
            date=r.deposit_date,
            category=r.category.name if r.category is not None else None,
            created_at=r.created_at,
        )
        for r in income
    )
    movements.sort(key=lambda m: (m.date, m.created_at), reverse=True)
    return tuple(movements[:limit])


def build_dashboard_summary(
    accounts: Sequence[Account],
    purchases: Sequence[Purchase],
    income: Sequence[IncomeRecord],
    today: Optional[date] = None,
    recent_limit: int = RECENT_MOVEMENTS,
) -> DashboardSummary:
    """Build the dashboard summary from cache snapshots.

    Args:
        accounts: Loaded accounts
        purchases: Loaded purchases (any state)
        income: Loaded income records
        today: Reference date for the "this month" figures
        recent_limit: Number of recent movements to include

    Returns:
        DashboardSummary
    """
    today = today or date.today()
    month_income = [r for r in income if _same_month(r.deposit_date, today)]
    month_spending = [
        p for p in aggregates.approved_purchases(purchases) if _same_month(p.purchase_date, today)
    ]

    return DashboardSummary(
        total_balance=aggregates.total_balance(accounts),
        income_this_month=aggregates.total_income(month_income),
        spending_this_month=aggregates.total_approved_amount(month_spending),
        pending_purchases=len(aggregates.pending_purchases(purchases)),
        income_by_category=_category_totals(month_income),
        spending_by_category=_category_totals(month_spending),
        balances_by_account=tuple(
            AccountBalance(account=a.name, balance=a.balance, color=a.color)
            for a in aggregates.active_accounts(accounts)
        ),
        recent_movements=_movements(purchases, income, recent_limit),
    )


class SummaryService:
    """Service that refreshes the caches a dashboard needs and summarizes them."""

    def __init__(
        self,
        accounts: AccountService,
        purchases: PurchaseWorkflowService,
        income: IncomeLedgerService,
    ):
        self.accounts = accounts
        self.purchases = purchases
        self.income = income

    async def load_dashboard(self, today: Optional[date] = None) -> DashboardSummary:
        await self.accounts.load_accounts()
        await self.purchases.load_purchases(PurchaseFilters())
        await self.income.load_income(IncomeFilters())
        return self.build(today)

    def build(self, today: Optional[date] = None) -> DashboardSummary:
        return build_dashboard_summary(
            accounts=self.accounts.cache.items,
            purchases=self.purchases.cache.items,
            income=self.income.cache.items,
            today=today,
        )
