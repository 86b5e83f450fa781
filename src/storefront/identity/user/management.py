"""Profile updates and account removal."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import PROFILE_FIELDS, User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class UpdateUser:
    user_id = Identifier(required=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    phone = String(max_length=30)
    address = Text()
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)


@storefront.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)
    requested_by = Identifier()


@storefront.command_handler(part_of=User)
class ManageUserHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        changes = {name: getattr(command, name) for name in PROFILE_FIELDS if getattr(command, name) is not None}
        user.update_profile(**changes)
        repo.add(user)

    @handle(DeleteUser)
    def delete_user(self, command):
        """Remove the account with its carts and reviews. Orders stay as sales records."""
        from storefront.ordering.cart.cart import Cart
        from storefront.reviews.review.review import Review

        if command.requested_by and str(command.requested_by) == str(command.user_id):
            raise ValidationError({"user": ["You cannot delete your own account"]})

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(user.id)
        if cart is not None:
            cart_repo.remove(cart)

        review_repo = current_domain.repository_for(Review)
        for review in review_repo.by_user(user.id):
            review_repo.remove(review)

        repo.remove(user)
        logger.info("user_deleted", user_id=str(user.id))
