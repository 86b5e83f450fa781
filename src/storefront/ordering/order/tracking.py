"""Tracking email: records the tracking number and mails it to the customer."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.notifications.channel import get_email_channel
from storefront.ordering.order.events import TrackingEmailSent
from storefront.ordering.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class SendTrackingEmail:
    order_id = Identifier(required=True)
    tracking_number = String(max_length=100)


def tracking_message(order):
    subject = f"Your order {order.order_number} is on its way"
    body = (
        f"Hi {order.first_name},\n\n"
        f"Your order {order.order_number} has shipped.\n"
        f"Tracking number: {order.tracking_number}\n"
    )
    return subject, body


@storefront.command_handler(part_of=Order)
class SendTrackingEmailHandler:
    @handle(SendTrackingEmail)
    def send_tracking_email(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if command.tracking_number:
            order.assign_tracking_number(command.tracking_number)
        if not order.tracking_number:
            raise ValidationError({"tracking_number": ["can't be blank"]})

        subject, body = tracking_message(order)
        result = get_email_channel().send(to=order.email, subject=subject, body=body)
        if result["status"] != "sent":
            logger.error("tracking_email_failed", order_number=order.order_number, error=result.get("error"))
            raise ValidationError({"email": ["Tracking email could not be sent"]})

        order.raise_(
            TrackingEmailSent(
                order_id=order.id,
                order_number=order.order_number,
                email=order.email,
                message_id=result["message_id"],
            )
        )
        repo.add(order)
        return result["message_id"]
