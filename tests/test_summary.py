"""Tests for the dashboard summary."""

from datetime import date
from decimal import Decimal

from fundtrack.domain.payloads import NewIncome, NewPurchase
from fundtrack.domain.summary import CategoryTotal


async def _seed(app_for, users, categories, accounts):
    manager = app_for(users.manager)
    treasurer = app_for(users.treasurer)

    food = await manager.purchases.submit_purchase(
        NewPurchase(description="Kibble", amount=Decimal("300.00"), category_id=categories.food.id, purchase_date=date(2024, 3, 2))
    )
    vet = await manager.purchases.submit_purchase(
        NewPurchase(description="Vaccines", amount=Decimal("500.00"), category_id=categories.vet.id, purchase_date=date(2024, 3, 8))
    )
    old = await manager.purchases.submit_purchase(
        NewPurchase(description="Old kibble", amount=Decimal("90.00"), category_id=categories.food.id, purchase_date=date(2024, 2, 20))
    )
    await manager.purchases.submit_purchase(
        NewPurchase(description="Toys", amount=Decimal("45.00"), category_id=categories.food.id, purchase_date=date(2024, 3, 9))
    )
    for purchase in (food, vet, old):
        await treasurer.purchases.approve_purchase(purchase.id, accounts.bank.id)

    await treasurer.income.create_income(
        NewIncome(
            description="Donation",
            amount=Decimal("1000.00"),
            category_id=categories.donations.id,
            account_id=accounts.bank.id,
            deposit_date=date(2024, 3, 1),
        )
    )
    await treasurer.income.create_income(
        NewIncome(
            description="Raffle",
            amount=Decimal("250.00"),
            category_id=categories.events.id,
            account_id=accounts.cash.id,
            deposit_date=date(2024, 3, 10),
        )
    )
    return treasurer


async def test_dashboard_figures(app_for, users, categories, accounts):
    await _seed(app_for, users, categories, accounts)
    app = app_for(users.admin)

    summary = await app.summary.load_dashboard(today=date(2024, 3, 15))

    assert summary.total_balance == Decimal("1250.00")
    assert summary.income_this_month == Decimal("1250.00")
    # The February purchase and the pending one are excluded
    assert summary.spending_this_month == Decimal("800.00")
    assert summary.pending_purchases == 1
    assert summary.spending_by_category == (
        CategoryTotal(category="Veterinary", total=Decimal("500.00")),
        CategoryTotal(category="Food", total=Decimal("300.00")),
    )
    assert [c.category for c in summary.income_by_category] == ["Donations", "Events"]
    assert [b.account for b in summary.balances_by_account] == ["Main Bank", "Petty Cash"]


async def test_recent_movements_are_newest_first(app_for, users, categories, accounts):
    await _seed(app_for, users, categories, accounts)
    app = app_for(users.admin)

    summary = await app.summary.load_dashboard(today=date(2024, 3, 15))

    assert [m.description for m in summary.recent_movements[:3]] == ["Raffle", "Toys", "Vaccines"]
    assert summary.recent_movements[0].kind == "income"
    assert summary.recent_movements[1].state.value == "pending"


async def test_recent_movements_limit(app_for, users, categories, accounts):
    from fundtrack.domain.summary import build_dashboard_summary

    await _seed(app_for, users, categories, accounts)
    app = app_for(users.admin)
    await app.summary.load_dashboard()

    summary = build_dashboard_summary(
        app.accounts.cache.items,
        app.purchases.cache.items,
        app.income.cache.items,
        today=date(2024, 3, 15),
        recent_limit=2,
    )

    assert len(summary.recent_movements) == 2


async def test_empty_dashboard(app_for):
    summary = await app_for(None).summary.load_dashboard(today=date(2024, 3, 15))

    assert summary.total_balance == Decimal("0")
    assert summary.pending_purchases == 0
    assert summary.recent_movements == ()
