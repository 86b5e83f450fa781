"""Checkout: turns a cart into an order.

The cart's lines are priced once, stock is re-checked, the order is built
and saved, and the cart is emptied. All of it happens inside the handler's
unit of work.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.summary import cart_lines
from storefront.ordering.order.numbering import generate_order_number
from storefront.ordering.order.order import Order
from storefront.shared.errors import InsufficientInventoryError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Contact fields that fall back to the signed-in user's profile
PROFILE_FIELDS = ("email", "first_name", "last_name", "phone", "address", "city", "state", "zip_code", "country")


@storefront.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    email = String(max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    phone = String(max_length=30)
    address = Text()
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    notes = Text()
    shipping_method = String(max_length=50)
    payment_method = String(max_length=50)


def _contact_details(command, user_id):
    details = {name: getattr(command, name) for name in PROFILE_FIELDS}

    if user_id:
        from storefront.identity.user.user import User

        try:
            user = current_domain.repository_for(User).get(user_id)
        except ObjectNotFoundError:
            user = None
        if user is not None:
            for name in PROFILE_FIELDS:
                if not details[name]:
                    details[name] = getattr(user, name)

    return details


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get(command.cart_id)

        lines = cart_lines(cart)
        if not lines:
            raise ValidationError({"cart": ["Your cart is empty. Please add some items before checkout."]})

        for line in lines:
            if not line.source.active:
                raise ValidationError({"cart": [f"{line.source.name} is no longer available."]})
            if not line.in_stock:
                raise InsufficientInventoryError(available=line.available_quantity)

        order_repo = current_domain.repository_for(Order)
        order = Order.create(
            order_number=generate_order_number(order_repo.number_exists),
            user_id=cart.user_id,
            session_id=cart.session_id,
            notes=command.notes,
            shipping_method=command.shipping_method,
            payment_method=command.payment_method,
            **_contact_details(command, cart.user_id),
        )
        order.build_from_cart(lines)
        order_repo.add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_number=order.order_number,
            total_amount=order.total_amount,
            items_count=order.items_count(),
        )
        return order.order_number
