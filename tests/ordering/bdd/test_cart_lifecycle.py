"""BDD tests for the cart lifecycle."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.identity.user.registration import RegisterUser
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart, UpdateCartItem
from storefront.ordering.cart.resolution import ResolveCart

scenarios("features/cart_lifecycle.feature")


def _cart(shop) -> Cart:
    return current_domain.repository_for(Cart).get(shop["cart_id"])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a customer "{email}" with {quantity:d} of "{name}" in their cart'))
def customer_with_cart(shop, email, quantity, name):
    user_id = current_domain.process(
        RegisterUser(email=email, first_name="Jane", last_name="Doe"),
        asynchronous=False,
    )
    cart_id = current_domain.process(ResolveCart(user_id=user_id), asynchronous=False)
    current_domain.process(
        AddToCart(cart_id=cart_id, product=shop["products"][name].slug, quantity=quantity),
        asynchronous=False,
    )
    shop["user_id"] = user_id


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{quantity:d} of "{name}" are added to the cart'))
def add_items(shop, quantity, name, error):
    try:
        current_domain.process(
            AddToCart(cart_id=shop["cart_id"], product=shop["products"][name].slug, quantity=quantity),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the line quantity is set to {quantity:d}"))
def set_line_quantity(shop, quantity):
    item = _cart(shop).items[0]
    current_domain.process(
        UpdateCartItem(cart_id=shop["cart_id"], item_id=item.id, quantity=quantity),
        asynchronous=False,
    )


@when(parsers.cfparse('the customer signs in from session "{session_id}"'))
def customer_signs_in(shop, session_id):
    current_domain.process(ResolveCart(user_id=shop["user_id"], session_id=session_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_lines(shop, count):
    assert len(_cart(shop).items) == count


@then(parsers.cfparse("the customer's cart holds {count:d} items"))
def customer_cart_holds(shop, count):
    assert current_domain.repository_for(Cart).for_user(shop["user_id"]).total_items() == count


@then(parsers.cfparse('no cart remains for session "{session_id}"'))
def no_guest_cart(session_id):
    assert current_domain.repository_for(Cart).for_session(session_id) is None
