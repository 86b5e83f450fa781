"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier()
    email = String(required=True)
    items_count = Integer(required=True)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The fulfilment status of an order moved forward."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)


@storefront.event(part_of="Order")
class PaymentStatusChanged:
    """The payment status of an order changed."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)


@storefront.event(part_of="Order")
class TrackingNumberAssigned:
    """A carrier tracking number was recorded on an order."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    tracking_number = String(required=True)


@storefront.event(part_of="Order")
class TrackingEmailSent:
    """The customer was emailed their tracking details."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    email = String(required=True)
    message_id = String()
