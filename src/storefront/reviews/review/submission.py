"""Review submission and editing by customers."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.reviews.review.review import Review

# Orders in these states do not make a review a verified purchase
_VOIDED_STATUSES = ("cancelled", "refunded")


@storefront.command(part_of="Review")
class SubmitReview:
    product = String(required=True, max_length=255)  # slug or id
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True, max_length=100)
    content = Text(required=True)


@storefront.command(part_of="Review")
class UpdateReview:
    review_id = Identifier(required=True)
    rating = Integer()
    title = String(max_length=100)
    content = Text()
    requires_moderation = Boolean(default=True)


@storefront.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)


def _active_product(product_ref):
    repo = current_domain.repository_for(Product)
    try:
        return repo.find_by_slug(product_ref, active_only=True)
    except ObjectNotFoundError:
        product = repo.get(product_ref)
        if not product.active:
            raise ObjectNotFoundError("Product not found.") from None
        return product


def has_purchased(user_id, product_id) -> bool:
    from storefront.ordering.order.order import Order

    orders = current_domain.repository_for(Order).for_owner(user_id=user_id)
    return any(
        str(item.product_id) == str(product_id)
        for order in orders
        if order.status not in _VOIDED_STATUSES
        for item in order.items
    )


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        product = _active_product(command.product)
        repo = current_domain.repository_for(Review)

        if any(str(r.product_id) == str(product.id) for r in repo.by_user(command.user_id)):
            raise ValidationError({"review": ["You have already reviewed this product"]})

        review = Review.submit(
            product_id=product.id,
            user_id=command.user_id,
            rating=command.rating,
            title=command.title,
            content=command.content,
            verified_purchase=has_purchased(command.user_id, product.id),
        )
        repo.add(review)
        return str(review.id)

    @handle(UpdateReview)
    def update_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.edit(
            rating=command.rating,
            title=command.title,
            content=command.content,
            requires_moderation=command.requires_moderation is not False,
        )
        repo.add(review)

    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        repo.remove(repo.get(command.review_id))
