"""Review moderation: commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.reviews.review.review import Review


@storefront.command(part_of="Review")
class ApproveReview:
    review_id = Identifier(required=True)


@storefront.command(part_of="Review")
class RejectReview:
    review_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ApproveReview)
    def approve_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.approve()
        repo.add(review)

    @handle(RejectReview)
    def reject_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.reject()
        repo.add(review)
