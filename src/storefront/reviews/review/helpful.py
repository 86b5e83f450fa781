"""Marking a review as helpful."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.reviews.review.review import Review


@storefront.command(part_of="Review")
class MarkReviewHelpful:
    review_id = Identifier(required=True)
    user_id = Identifier()


@storefront.command_handler(part_of=Review)
class MarkReviewHelpfulHandler:
    @handle(MarkReviewHelpful)
    def mark_helpful(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        if not review.approved:
            raise ObjectNotFoundError("Review not found.")

        review.mark_helpful(command.user_id)
        repo.add(review)
        return review.helpful_count
