"""BDD tests for checkout and the order lifecycle."""

from datetime import UTC, datetime, timedelta

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

from storefront.catalogue.product.details import UpdateProduct
from storefront.ordering.order.checkout import PlaceOrder
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import UpdateOrderStatus, UpdatePaymentStatus

scenarios("features/order_lifecycle.feature")

SHIPPING = {
    "email": "guest@example.com",
    "first_name": "Sam",
    "last_name": "Guest",
    "address": "1 Elm Row",
    "city": "Portland",
    "state": "OR",
    "zip_code": "97201",
}


def _order(shop) -> Order:
    return current_domain.repository_for(Order).find_by_number(shop["order_number"])


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the guest checks out")
def guest_checks_out(shop, error):
    try:
        shop["order_number"] = current_domain.process(
            PlaceOrder(cart_id=shop["cart_id"], **SHIPPING),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the price of "{name}" changes to {price:f}'))
def change_price(shop, name, price):
    product = shop["products"][name]
    current_domain.process(UpdateProduct(product_id=product.id, price=price), asynchronous=False)


@when(parsers.cfparse('the order status is changed to "{status}"'))
def change_status(shop, status, error):
    try:
        current_domain.process(UpdateOrderStatus(order_id=_order(shop).id, status=status), asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


@when("the order is delivered")
def deliver_order(shop):
    for status in ("processing", "shipped", "delivered"):
        current_domain.process(UpdateOrderStatus(order_id=_order(shop).id, status=status), asynchronous=False)


@when(parsers.cfparse("the order was placed {days:d} days ago"))
def backdate_order(shop, days):
    order = _order(shop)
    order.created_at = datetime.now(UTC) - timedelta(days=days)
    current_domain.repository_for(Order).add(order)


@when(parsers.cfparse('the payment status is changed to "{payment_status}"'))
def change_payment_status(shop, payment_status):
    current_domain.process(
        UpdatePaymentStatus(order_id=_order(shop).id, payment_status=payment_status),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("an order is placed with total {total:f}"))
def order_total(shop, total):
    assert _order(shop).total_amount == float(total)


@then(parsers.cfparse("the order subtotal is {subtotal:f} with tax {tax:f} and shipping {shipping:f}"))
def order_breakdown(shop, subtotal, tax, shipping):
    order = _order(shop)
    assert (order.subtotal, order.tax_amount, order.shipping_cost) == (float(subtotal), float(tax), float(shipping))


@then(parsers.cfparse("the order line unit price is {price:f}"))
def order_line_price(shop, price):
    assert _order(shop).items[0].unit_price == float(price)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status(shop, status):
    assert _order(shop).status == status


@then(parsers.cfparse('the payment status is "{payment_status}"'))
def payment_status(shop, payment_status):
    assert _order(shop).payment_status == payment_status
