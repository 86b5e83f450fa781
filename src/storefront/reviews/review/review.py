"""Review aggregate: a customer's rating and comments on a product.

New and edited reviews wait for moderation. Only approved reviews appear in
the public catalogue and count towards a product's rating.

Moderation (2 flags):
    pending  = not approved, not rejected
    approve  → approved, not rejected
    reject   → not approved, rejected
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.reviews.review.events import (
    ReviewApproved,
    ReviewEdited,
    ReviewMarkedHelpful,
    ReviewRejected,
    ReviewSubmitted,
)
from storefront.shared.queries import fetch_all

MAX_CONTENT_LENGTH = 1000


@storefront.entity(part_of="Review")
class HelpfulMark:
    """One shopper's "this was helpful" on a review."""

    user_id = Identifier(required=True)
    marked_at = DateTime(required=True)


@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True, max_length=100)
    content = Text(required=True)
    verified_purchase = Boolean(default=False)
    helpful_count = Integer(default=0, min_value=0)
    approved = Boolean(default=False)
    rejected = Boolean(default=False)
    helpful_marks = HasMany(HelpfulMark)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None and not 1 <= self.rating <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

    @invariant.post
    def content_must_fit(self):
        if self.content and len(self.content) > MAX_CONTENT_LENGTH:
            raise ValidationError({"content": [f"is too long (maximum is {MAX_CONTENT_LENGTH} characters)"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, product_id, user_id, rating, title, content, verified_purchase=False):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            title=title,
            content=content,
            verified_purchase=verified_purchase,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=review.id,
                product_id=product_id,
                user_id=user_id,
                rating=rating,
            )
        )
        return review

    # -------------------------------------------------------------------
    # Editing and moderation
    # -------------------------------------------------------------------
    def edit(self, rating=None, title=None, content=None, requires_moderation=True):
        """Change the review; edits by the author send it back to moderation."""
        if rating is not None:
            self.rating = rating
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if requires_moderation:
            self.approved = False
            self.rejected = False
        self.updated_at = datetime.now(UTC)

        self.raise_(ReviewEdited(review_id=self.id, product_id=self.product_id, rating=self.rating))

    def approve(self):
        self.approved = True
        self.rejected = False
        self.updated_at = datetime.now(UTC)

        self.raise_(ReviewApproved(review_id=self.id, product_id=self.product_id, rating=self.rating))

    def reject(self):
        self.approved = False
        self.rejected = True
        self.updated_at = datetime.now(UTC)

        self.raise_(ReviewRejected(review_id=self.id, product_id=self.product_id))

    # -------------------------------------------------------------------
    # Helpful marks
    # -------------------------------------------------------------------
    def can_be_marked_helpful_by(self, user_id):
        if not user_id or str(user_id) == str(self.user_id):
            return False
        return not any(str(mark.user_id) == str(user_id) for mark in self.helpful_marks)

    def mark_helpful(self, user_id):
        if not user_id:
            raise ValidationError({"user": ["You must be signed in to mark a review as helpful"]})
        if str(user_id) == str(self.user_id):
            raise ValidationError({"user": ["You cannot mark your own review as helpful"]})
        if not self.can_be_marked_helpful_by(user_id):
            raise ValidationError({"user": ["You have already marked this review as helpful"]})

        now = datetime.now(UTC)
        self.add_helpful_marks(HelpfulMark(user_id=user_id, marked_at=now))
        self.helpful_count = (self.helpful_count or 0) + 1
        self.updated_at = now

        self.raise_(ReviewMarkedHelpful(review_id=self.id, user_id=user_id, helpful_count=self.helpful_count))

    # -------------------------------------------------------------------
    # Presentation helpers
    # -------------------------------------------------------------------
    def is_pending(self):
        return not self.approved and not self.rejected

    def star_rating(self):
        return "★" * self.rating + "☆" * (5 - self.rating)

    def truncated_content(self, limit=150):
        return self.content if len(self.content) <= limit else f"{self.content[:limit]}..."


def _newest_first(reviews):
    return sorted(reviews, key=lambda r: r.created_at.timestamp() if r.created_at else 0, reverse=True)


@storefront.repository(part_of=Review)
class ReviewRepository:
    def for_product(self, product_id, approved_only: bool = True) -> list[Review]:
        filters = {"product_id": str(product_id)}
        if approved_only:
            filters["approved"] = True
        return _newest_first(fetch_all(self._dao, **filters))

    def by_user(self, user_id) -> list[Review]:
        return _newest_first(fetch_all(self._dao, user_id=str(user_id)))

    def pending(self) -> list[Review]:
        return _newest_first([r for r in fetch_all(self._dao, approved=False) if not r.rejected])

    def everything(self) -> list[Review]:
        return _newest_first(fetch_all(self._dao))

    def remove(self, review: Review) -> None:
        self._dao.delete(review)

    def remove_for_product(self, product_id) -> int:
        reviews = fetch_all(self._dao, product_id=str(product_id))
        for review in reviews:
            self._dao.delete(review)
        return len(reviews)
