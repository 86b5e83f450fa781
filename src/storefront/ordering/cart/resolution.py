"""Cart resolution at the request boundary.

``ResolveCart`` is issued once per request that needs a cart:

- a guest gets the cart tied to its session, created on first use;
- a signed-in user gets their own cart, and a cart left behind by the same
  session is merged into it and then deleted.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Cart")
class ResolveCart:
    user_id = Identifier()
    session_id = String(max_length=255)


@storefront.command_handler(part_of=Cart)
class ResolveCartHandler:
    @handle(ResolveCart)
    def resolve_cart(self, command):
        repo = current_domain.repository_for(Cart)

        if command.user_id:
            return self._user_cart(repo, command.user_id, command.session_id)

        if command.session_id:
            cart = repo.for_session(command.session_id)
            if cart is None:
                cart = Cart.create(session_id=command.session_id)
                repo.add(cart)
            return str(cart.id)

        raise ValidationError({"cart": ["A signed-in user or a session is required"]})

    def _user_cart(self, repo, user_id, session_id):
        cart = repo.for_user(user_id)
        created = cart is None
        if created:
            cart = Cart.create(user_id=user_id)

        guest_cart = repo.for_session(session_id) if session_id else None
        if guest_cart is not None:
            cart.merge_with(guest_cart)
            repo.remove(guest_cart)
            logger.info(
                "guest_cart_merged",
                cart_id=str(cart.id),
                guest_cart_id=str(guest_cart.id),
                items_merged=len(guest_cart.items),
            )

        if created or guest_cart is not None:
            repo.add(cart)
        return str(cart.id)
