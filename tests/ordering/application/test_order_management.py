"""Application tests for back-office order updates and tracking emails."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.notifications.channel import get_email_channel
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.cart.resolution import ResolveCart
from storefront.ordering.order.checkout import PlaceOrder
from storefront.ordering.order.invoice import invoice_payload
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import UpdateOrderNotes, UpdateOrderStatus, UpdatePaymentStatus
from storefront.ordering.order.tracking import SendTrackingEmail


@pytest.fixture()
def order(product):
    cart_id = current_domain.process(ResolveCart(session_id="sess-001"), asynchronous=False)
    current_domain.process(AddToCart(cart_id=cart_id, product=product.slug, quantity=2), asynchronous=False)
    order_number = current_domain.process(
        PlaceOrder(
            cart_id=cart_id,
            email="guest@example.com",
            first_name="Sam",
            last_name="Guest",
            address="1 Elm Row",
            city="Portland",
            state="OR",
            zip_code="97201",
            payment_method="card",
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).find_by_number(order_number)


def _reload(order):
    return current_domain.repository_for(Order).get(order.id)


class TestStatusUpdates:
    def test_forward_transition(self, order):
        current_domain.process(UpdateOrderStatus(order_id=order.id, status="processing"), asynchronous=False)
        assert _reload(order).status == "processing"

    def test_invalid_transition_leaves_order_unchanged(self, order):
        with pytest.raises(ValidationError):
            current_domain.process(UpdateOrderStatus(order_id=order.id, status="delivered"), asynchronous=False)
        assert _reload(order).status == "pending"

    def test_payment_status(self, order):
        current_domain.process(UpdatePaymentStatus(order_id=order.id, payment_status="paid"), asynchronous=False)
        assert _reload(order).payment_status == "paid"

    def test_notes(self, order):
        current_domain.process(UpdateOrderNotes(order_id=order.id, notes="Gift wrap"), asynchronous=False)
        assert _reload(order).notes == "Gift wrap"


class TestTrackingEmail:
    def test_sends_tracking_number(self, order):
        current_domain.process(SendTrackingEmail(order_id=order.id, tracking_number="1Z999"), asynchronous=False)

        assert _reload(order).tracking_number == "1Z999"
        messages = get_email_channel().messages_to("guest@example.com")
        assert len(messages) == 1
        assert order.order_number in messages[0]["subject"]
        assert "1Z999" in messages[0]["body"]

    def test_tracking_number_is_required(self, order):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(SendTrackingEmail(order_id=order.id), asynchronous=False)
        assert "tracking_number" in exc.value.messages

    def test_delivery_failure(self, order):
        get_email_channel().fail_with = "mailbox unavailable"
        with pytest.raises(ValidationError) as exc:
            current_domain.process(SendTrackingEmail(order_id=order.id, tracking_number="1Z999"), asynchronous=False)
        assert exc.value.messages == {"email": ["Tracking email could not be sent"]}


def test_invoice(order):
    invoice = invoice_payload(order)["invoice"]
    assert invoice["order_number"] == order.order_number
    assert invoice["bill_to"]["name"] == "Sam Guest"
    assert invoice["lines"][0]["total_price"] == "$20.00"
    assert invoice["total"] == "$27.59"
    assert invoice["payment_method"] == "card"
