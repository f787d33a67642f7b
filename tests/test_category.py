"""Tests for purchase and income categories."""

import pytest

from fundtrack.domain.entities import CategoryKind
from fundtrack.domain.errors import ConflictError, NotFoundError, ValidationError
from fundtrack.domain.payloads import CategoryPatch, NewCategory


async def test_create_category_defaults(app_for):
    app = app_for(None)

    category = await app.categories.create_category(CategoryKind.PURCHASE, NewCategory(name="Cleaning"))

    assert category.kind == CategoryKind.PURCHASE
    assert category.icon == "pi pi-tag"
    assert category.color == "#6B7280"
    assert category.active is True
    assert app.categories.get_category(CategoryKind.PURCHASE, category.id) == category
    assert app.categories.get_category(CategoryKind.INCOME, category.id) is None


async def test_create_category_requires_name(app_for):
    with pytest.raises(ValidationError):
        await app_for(None).categories.create_category(CategoryKind.INCOME, NewCategory(name=""))


async def test_kinds_are_independent(app_for, categories):
    app = app_for(None)

    await app.categories.load_all_categories()

    assert [c.name for c in app.categories.cache_for(CategoryKind.PURCHASE)] == ["Food", "Veterinary"]
    assert [c.name for c in app.categories.cache_for(CategoryKind.INCOME)] == ["Donations", "Events"]


async def test_update_category(app_for, categories):
    app = app_for(None)
    await app.categories.load_categories(CategoryKind.INCOME)

    updated = await app.categories.update_category(
        CategoryKind.INCOME, categories.events.id, CategoryPatch(description="Fundraising events")
    )

    assert updated.description == "Fundraising events"
    assert updated.name == "Events"
    assert app.categories.get_category(CategoryKind.INCOME, categories.events.id) == updated


async def test_update_category_rejects_blank_name(app_for, categories):
    with pytest.raises(ValidationError):
        await app_for(None).categories.update_category(
            CategoryKind.PURCHASE, categories.food.id, CategoryPatch(name=" ")
        )


async def test_toggle_category(app_for, categories):
    app = app_for(None)
    await app.categories.load_categories(CategoryKind.PURCHASE)

    toggled = await app.categories.toggle_category(CategoryKind.PURCHASE, categories.food.id)
    assert toggled.active is False
    assert [c.name for c in app.categories.active_categories(CategoryKind.PURCHASE)] == ["Veterinary"]

    toggled = await app.categories.toggle_category(CategoryKind.PURCHASE, categories.food.id)
    assert toggled.active is True


async def test_toggle_with_stale_view_conflicts(app_for, categories):
    first = app_for(None)
    second = app_for(None)
    await first.categories.load_categories(CategoryKind.PURCHASE)
    await second.categories.load_categories(CategoryKind.PURCHASE)

    await first.categories.toggle_category(CategoryKind.PURCHASE, categories.vet.id)

    # The second session still believes the category is active
    with pytest.raises(ConflictError):
        await second.categories.toggle_category(CategoryKind.PURCHASE, categories.vet.id)

    stored = await second.db.get_category(CategoryKind.PURCHASE, categories.vet.id)
    assert stored.active is False
    assert second.categories.get_category(CategoryKind.PURCHASE, categories.vet.id).active is True


async def test_toggle_missing_category(app_for):
    with pytest.raises(NotFoundError, match="Income category 5 not found"):
        await app_for(None).categories.toggle_category(CategoryKind.INCOME, 5)
