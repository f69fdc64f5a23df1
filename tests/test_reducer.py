"""Tests for the pure cart reducer"""
import pytest

from storefront.cart import CartLine, CartState, EMPTY_CART, reduce
from storefront.cart.reducer import (
    AddItem,
    ClearCart,
    LoadCart,
    RemoveItem,
    UpdateQuantity,
    next_line_id,
)


def test_reduce_does_not_mutate_input(make_product):
    state = reduce(EMPTY_CART, AddItem(make_product(1), 2, line_id=10))

    new_state = reduce(state, AddItem(make_product(1), 3))

    assert state.items[0].quantity == 2
    assert new_state.items[0].quantity == 5
    assert new_state.items[0].id == 10


def test_add_uses_given_line_id(make_product):
    state = reduce(EMPTY_CART, AddItem(make_product(1), line_id=42))

    assert state.items[0].id == 42


def test_add_appends_in_insertion_order(make_product):
    state = EMPTY_CART
    for product_id in (3, 1, 2):
        state = reduce(state, AddItem(make_product(product_id)))

    assert [line.product_id for line in state.items] == [3, 1, 2]


def test_remove_missing_returns_same_object(make_product):
    state = reduce(EMPTY_CART, AddItem(make_product(1)))

    assert reduce(state, RemoveItem(2)) is state
    assert reduce(state, UpdateQuantity(2, 4)) is state


def test_clear_returns_empty():
    assert reduce(EMPTY_CART, ClearCart()) == CartState()


def test_load_merges_duplicates_and_drops_non_positive(make_product):
    lines = (
        CartLine(id=1, product=make_product(1), quantity=2),
        CartLine(id=2, product=make_product(2), quantity=0),
        CartLine(id=3, product=make_product(1), quantity=3),
        CartLine(id=4, product=make_product(4), quantity=-1),
    )

    state = reduce(EMPTY_CART, LoadCart(lines))

    assert len(state.items) == 1
    assert state.items[0].id == 1
    assert state.items[0].quantity == 5


def test_load_keeps_well_formed_items_unchanged(make_product):
    lines = (
        CartLine(id=1, product=make_product(1), quantity=2),
        CartLine(id=2, product=make_product(2), quantity=1),
    )

    assert reduce(EMPTY_CART, LoadCart(lines)).items == lines


def test_unknown_action_raises():
    with pytest.raises(TypeError):
        reduce(EMPTY_CART, "ADD_ITEM")


class TestNextLineId:
    """Synthetic line id generation"""

    def test_uses_clock_when_free(self):
        assert next_line_id([], now_ms=1_700_000_000_000) == 1_700_000_000_000

    def test_bumps_past_existing_ids(self, make_product):
        lines = [CartLine(id=500, product=make_product(1), quantity=1)]

        assert next_line_id(lines, now_ms=500) == 501
        assert next_line_id(lines, now_ms=100) == 501

    def test_defaults_to_wall_clock(self):
        assert next_line_id([]) > 1_600_000_000_000
