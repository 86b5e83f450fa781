"""Tests for the Cart aggregate."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartsMerged,
)


def _make_cart(**owner):
    return Cart.create(**(owner or {"session_id": "sess-001"}))


class TestOwnership:
    def test_guest_cart(self):
        cart = _make_cart(session_id="sess-001")
        assert cart.session_id == "sess-001"
        assert cart.user_id is None

    def test_user_cart_ignores_session(self):
        cart = _make_cart(user_id="user-001", session_id="sess-001")
        assert cart.user_id == "user-001"
        assert cart.session_id is None

    def test_cart_needs_an_owner(self):
        with pytest.raises(ValidationError):
            Cart.create()

    def test_belongs_to(self):
        cart = _make_cart(user_id="user-001")
        assert cart.belongs_to(user_id="user-001")
        assert not cart.belongs_to(user_id="user-002")
        assert not cart.belongs_to(session_id="sess-001")


class TestAddItem:
    def test_add_item(self):
        cart = _make_cart()
        cart.add_item("prod-001", None, 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_adding_same_line_accumulates(self):
        cart = _make_cart()
        cart.add_item("prod-001", None, 2)
        cart.add_item("prod-001", None, 3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_different_variant_is_a_new_line(self):
        cart = _make_cart()
        cart.add_item("prod-001", "var-001", 1)
        cart.add_item("prod-001", "var-002", 1)
        cart.add_item("prod-001", None, 1)
        assert len(cart.items) == 3

    def test_add_item_raises_event(self):
        cart = _make_cart()
        cart.add_item("prod-001", None, 2)
        cart.add_item("prod-001", None, 1)
        event = [e for e in cart._events if isinstance(e, CartItemAdded)][-1]
        assert event.quantity == 1
        assert event.line_quantity == 3


class TestUpdateQuantity:
    def test_update_quantity(self):
        cart = _make_cart()
        item = cart.add_item("prod-001", None, 1)
        cart.update_item_quantity(item.id, 4)
        assert cart.items[0].quantity == 4
        event = [e for e in cart._events if isinstance(e, CartItemQuantityChanged)][0]
        assert (event.previous_quantity, event.new_quantity) == (1, 4)

    def test_zero_removes_the_line(self):
        cart = _make_cart()
        item = cart.add_item("prod-001", None, 1)
        cart.update_item_quantity(item.id, 0)
        assert cart.items == []
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_unknown_item(self):
        with pytest.raises(ObjectNotFoundError):
            _make_cart().update_item_quantity("missing", 2)


class TestClearAndMerge:
    def test_clear(self):
        cart = _make_cart()
        cart.add_item("prod-001", None, 1)
        cart.add_item("prod-002", None, 1)
        cart.clear()
        assert cart.is_empty()
        assert cart._events[-1].items_removed == 2
        assert isinstance(cart._events[-1], CartCleared)

    def test_merge_adds_quantities(self):
        user_cart = _make_cart(user_id="user-001")
        user_cart.add_item("prod-001", None, 1)
        guest_cart = _make_cart(session_id="sess-001")
        guest_cart.add_item("prod-001", None, 2)
        guest_cart.add_item("prod-002", "var-001", 1)

        user_cart.merge_with(guest_cart)

        quantities = {(str(i.product_id), i.variant_id): i.quantity for i in user_cart.items}
        assert quantities == {("prod-001", None): 3, ("prod-002", "var-001"): 1}
        assert user_cart.total_items() == 4
        assert isinstance(user_cart._events[-1], CartsMerged)

    def test_drop_lines_for_variant(self):
        cart = _make_cart()
        cart.add_item("prod-001", "var-001", 1)
        cart.add_item("prod-001", None, 1)
        assert cart.drop_lines_for("prod-001", "var-001") == 1
        assert [i.variant_id for i in cart.items] == [None]


class TestAbandonment:
    def test_fresh_cart_is_not_abandoned(self):
        assert not _make_cart().is_abandoned()

    def test_cart_idle_for_a_day_is_abandoned(self):
        cart = _make_cart()
        cart.updated_at = datetime.now(UTC) - timedelta(hours=25)
        assert cart.is_abandoned()

    def test_custom_idle_threshold(self):
        cart = _make_cart()
        cart.updated_at = datetime.now(UTC) - timedelta(hours=3)
        assert cart.is_abandoned(idle_for=timedelta(hours=2))
        assert not cart.is_abandoned(idle_for=timedelta(hours=4))
