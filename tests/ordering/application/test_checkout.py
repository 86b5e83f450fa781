"""Application tests for turning a cart into an order."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.product.details import UpdateProduct
from storefront.catalogue.product.lifecycle import ToggleProductActive
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.cart.resolution import ResolveCart
from storefront.ordering.order.checkout import PlaceOrder
from storefront.ordering.order.order import Order
from storefront.shared.errors import InsufficientInventoryError

SHIPPING = {
    "email": "guest@example.com",
    "first_name": "Sam",
    "last_name": "Guest",
    "address": "1 Elm Row",
    "city": "Portland",
    "state": "OR",
    "zip_code": "97201",
}


def _cart_with(product, quantity=2, session_id="sess-001", user_id=None):
    cart_id = current_domain.process(ResolveCart(user_id=user_id, session_id=session_id), asynchronous=False)
    current_domain.process(AddToCart(cart_id=cart_id, product=product.slug, quantity=quantity), asynchronous=False)
    return cart_id


def _place(cart_id, **details):
    order_number = current_domain.process(PlaceOrder(cart_id=cart_id, **details), asynchronous=False)
    return current_domain.repository_for(Order).find_by_number(order_number)


class TestPlaceOrder:
    def test_order_totals(self, product):
        order = _place(_cart_with(product, 2), **SHIPPING)

        assert order.order_number.startswith("BM")
        assert order.session_id == "sess-001"
        assert order.subtotal == 20.0
        assert order.tax_amount == 1.6
        assert order.shipping_cost == 5.99
        assert order.total_amount == 27.59
        assert order.status == "pending"
        assert order.payment_status == "payment_pending"

    def test_cart_is_emptied(self, product):
        cart_id = _cart_with(product)
        _place(cart_id, **SHIPPING)
        assert current_domain.repository_for(Cart).get(cart_id).is_empty()

    def test_stock_is_not_decremented(self, product):
        _place(_cart_with(product, 2), **SHIPPING)
        assert current_domain.repository_for(type(product)).get(product.id).inventory_count == 10

    def test_prices_are_frozen(self, product):
        order = _place(_cart_with(product, 2), **SHIPPING)

        current_domain.process(UpdateProduct(product_id=product.id, price=99.0), asynchronous=False)

        reloaded = current_domain.repository_for(Order).get(order.id)
        assert reloaded.items[0].unit_price == 10.0
        assert reloaded.total_amount == 27.59

    def test_signed_in_customer_profile_fills_contact_details(self, customer, product):
        order = _place(_cart_with(product, session_id=None, user_id=customer.id))
        assert order.user_id == customer.id
        assert order.email == "jane@example.com"
        assert order.city == "Springfield"

    def test_explicit_details_win_over_profile(self, customer, product):
        order = _place(_cart_with(product, session_id=None, user_id=customer.id), city="Chicago")
        assert order.city == "Chicago"


class TestCheckoutRefusals:
    def test_empty_cart(self):
        cart_id = current_domain.process(ResolveCart(session_id="sess-001"), asynchronous=False)
        with pytest.raises(ValidationError) as exc:
            _place(cart_id, **SHIPPING)
        assert exc.value.messages == {"cart": ["Your cart is empty. Please add some items before checkout."]}

    def test_stock_dropped_after_adding(self, product):
        cart_id = _cart_with(product, 5)
        current_domain.process(UpdateProduct(product_id=product.id, inventory_count=3), asynchronous=False)

        with pytest.raises(InsufficientInventoryError):
            _place(cart_id, **SHIPPING)
        assert current_domain.repository_for(Order).everything() == []

    def test_deactivated_product(self, product):
        cart_id = _cart_with(product)
        current_domain.process(ToggleProductActive(product_id=product.id), asynchronous=False)

        with pytest.raises(ValidationError) as exc:
            _place(cart_id, **SHIPPING)
        assert exc.value.messages == {"cart": ["Friendship Bracelet is no longer available."]}

    def test_missing_contact_details(self, product):
        with pytest.raises(ValidationError):
            _place(_cart_with(product), email="guest@example.com")
