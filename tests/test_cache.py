"""Tests for the view-state caches."""

from dataclasses import dataclass

from fundtrack.domain.cache import ViewState, ViewStateCache


@dataclass(frozen=True)
class Item:
    id: int
    label: str


def test_replace_all_and_get():
    cache = ViewStateCache("items")
    cache.replace_all([Item(1, "a"), Item(2, "b")])

    assert len(cache) == 2
    assert cache.get(2) == Item(2, "b")
    assert cache.get(3) is None


def test_prepend_and_append():
    cache = ViewStateCache("items")
    cache.replace_all([Item(2, "b")])

    cache.prepend(Item(3, "c"))
    cache.append(Item(1, "a"))

    assert [i.id for i in cache] == [3, 2, 1]


def test_replace_keeps_position():
    cache = ViewStateCache("items")
    cache.replace_all([Item(1, "a"), Item(2, "b"), Item(3, "c")])

    assert cache.replace(Item(2, "B")) is True
    assert cache.items == (Item(1, "a"), Item(2, "B"), Item(3, "c"))


def test_replace_missing_item_is_noop():
    cache = ViewStateCache("items")
    cache.replace_all([Item(1, "a")])
    seen = []
    cache.subscribe(seen.append)

    assert cache.replace(Item(9, "z")) is False
    assert cache.items == (Item(1, "a"),)
    assert seen == []


def test_remove():
    cache = ViewStateCache("items")
    cache.replace_all([Item(1, "a"), Item(2, "b")])

    assert cache.remove(1) is True
    assert cache.remove(1) is False
    assert cache.items == (Item(2, "b"),)


def test_items_is_a_snapshot():
    cache = ViewStateCache("items")
    cache.replace_all([Item(1, "a")])
    snapshot = cache.items

    cache.append(Item(2, "b"))

    assert snapshot == (Item(1, "a"),)


def test_subscribers_receive_snapshots_until_unsubscribed():
    cache = ViewStateCache("items")
    seen = []
    unsubscribe = cache.subscribe(seen.append)

    cache.append(Item(1, "a"))
    cache.prepend(Item(2, "b"))
    unsubscribe()
    cache.remove(1)

    assert seen == [(Item(1, "a"),), (Item(2, "b"), Item(1, "a"))]
    unsubscribe()


def test_view_state_has_independent_caches():
    state = ViewState()
    state.purchases.append(Item(1, "a"))

    assert len(state.purchases) == 1
    assert len(state.income) == 0
    assert state.purchase_categories is not state.income_categories
    assert state.config is None
