"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from storefront.catalogue.product.creation import CreateProduct
from storefront.catalogue.product.product import Product
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart, ClearCart
from storefront.ordering.cart.resolution import ResolveCart


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the refusal captured by When steps."""
    return {"exc": None}


@pytest.fixture()
def shop():
    """What the scenario has set up so far: products by name and the current cart."""
    return {"products": {}, "cart_id": None, "order_number": None}


def _cart(shop) -> Cart:
    return current_domain.repository_for(Cart).get(shop["cart_id"])


def _add(shop, name, quantity):
    current_domain.process(
        AddToCart(cart_id=shop["cart_id"], product=shop["products"][name].slug, quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_catalogue(shop, category, name, price, stock):
    product_id = current_domain.process(
        CreateProduct(
            name=name,
            description=f"{name}, made by hand.",
            price=price,
            inventory_count=stock,
            category_id=category.id,
        ),
        asynchronous=False,
    )
    shop["products"][name] = current_domain.repository_for(Product).get(product_id)


@given(parsers.cfparse('a guest cart for session "{session_id}"'))
def guest_cart(shop, session_id):
    shop["cart_id"] = current_domain.process(ResolveCart(session_id=session_id), asynchronous=False)


@given(parsers.cfparse('{quantity:d} of "{name}" in the cart'))
def items_in_cart(shop, quantity, name):
    _add(shop, name, quantity)


@given("the cart is cleared")
def cart_was_cleared(shop):
    current_domain.process(ClearCart(cart_id=shop["cart_id"]), asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the cart is cleared")
def clear_cart(shop):
    current_domain.process(ClearCart(cart_id=shop["cart_id"]), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is refused with "{message}"'))
def request_refused(error, message):
    assert isinstance(error["exc"], ValidationError)
    messages = [text for texts in error["exc"].messages.values() for text in texts]
    assert message in messages


@then("the cart is empty")
def cart_is_empty(shop):
    assert _cart(shop).is_empty()


@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_holds(shop, count):
    assert _cart(shop).total_items() == count
