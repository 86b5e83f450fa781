"""Domain events for the Review aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    """A customer submitted a review; it awaits moderation."""

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)


@storefront.event(part_of="Review")
class ReviewEdited:
    """A review's rating or text changed."""

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)


@storefront.event(part_of="Review")
class ReviewApproved:
    """A review became visible on the storefront."""

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)


@storefront.event(part_of="Review")
class ReviewRejected:
    """A review was turned down by a moderator."""

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Review")
class ReviewMarkedHelpful:
    """Another shopper found a review helpful."""

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    helpful_count = Integer(required=True)
