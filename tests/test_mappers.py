"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from fundtrack.database.models import (
    Account as ORMAccount,
    Purchase as ORMPurchase,
    PurchaseCategory as ORMPurchaseCategory,
    User as ORMUser,
)
from fundtrack.database.mappers import account_to_domain, purchase_to_domain
from fundtrack.domain.entities import AccountType, CategoryKind, PurchaseState, Role

NOW = datetime(2024, 1, 1, tzinfo=UTC)


def _orm_user(id, first_name):
    return ORMUser(
        id=id,
        email=f"{first_name.lower()}@example.org",
        first_name=first_name,
        last_name="",
        role=Role.TREASURER.value,
        active=True,
        created_at=NOW,
        updated_at=NOW,
    )


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        orm_account = ORMAccount(
            id=1,
            name="Petty Cash",
            account_type="cash",
            balance=Decimal("12.5"),
            active=True,
            color="#000000",
            created_at=NOW,
            updated_at=NOW,
        )

        account = account_to_domain(orm_account)

        assert account.account_type == AccountType.CASH
        assert account.balance == Decimal("12.50")
        assert str(account.balance) == "12.50"
        assert account.bank is None


class TestPurchaseMapper:
    """Tests for Purchase mapper with joined rows."""

    def test_purchase_to_domain_with_joins(self):
        orm_purchase = ORMPurchase(
            id=5,
            description="Collars",
            amount=Decimal("99.9"),
            category_id=2,
            account_id=None,
            purchase_date=date(2024, 1, 3),
            state="rejected",
            submitted_by=3,
            reviewed_by=4,
            reviewed_at=NOW,
            rejection_reason="Too expensive",
            created_at=NOW,
            updated_at=NOW,
        )
        orm_purchase.category = ORMPurchaseCategory(
            id=2, name="Supplies", icon="pi pi-box", color="#111111", active=True, created_at=NOW
        )
        orm_purchase.submitter = _orm_user(3, "Lucia")
        orm_purchase.reviewer = _orm_user(4, "Tomas")

        purchase = purchase_to_domain(orm_purchase)

        assert purchase.state == PurchaseState.REJECTED
        assert purchase.amount == Decimal("99.90")
        assert purchase.category.kind == CategoryKind.PURCHASE
        assert purchase.category.name == "Supplies"
        assert purchase.submitter.first_name == "Lucia"
        assert purchase.reviewer.role == Role.TREASURER
        assert purchase.account is None
