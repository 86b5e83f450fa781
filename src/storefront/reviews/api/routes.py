"""FastAPI endpoints for shoppers' reviews."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.ability import Ability
from storefront.identity.actor import Actor
from storefront.reviews.api.schemas import SubmitReviewRequest
from storefront.reviews.review.helpful import MarkReviewHelpful
from storefront.reviews.review.review import Review
from storefront.reviews.review.submission import SubmitReview
from storefront.web.dependencies import current_ability, current_actor

router = APIRouter(tags=["reviews"])

PENDING_NOTICE = "Thank you for your review! It will be visible after approval."


@router.post("/products/{slug}/reviews", status_code=201)
async def submit_review(
    slug: str,
    body: SubmitReviewRequest,
    actor: Actor = Depends(current_actor),
    ability: Ability = Depends(current_ability),
) -> dict:
    ability.authorize("create", "Review")
    command = SubmitReview(
        product=slug,
        user_id=actor.user_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return {"review_id": review_id, "message": PENDING_NOTICE}


@router.post("/reviews/{review_id}/helpful")
async def mark_helpful(
    review_id: str,
    actor: Actor = Depends(current_actor),
    ability: Ability = Depends(current_ability),
) -> dict:
    review = current_domain.repository_for(Review).get(review_id)
    if not review.approved:
        raise ObjectNotFoundError("Review not found.")
    ability.authorize("mark_helpful", "Review", review)

    helpful_count = current_domain.process(
        MarkReviewHelpful(review_id=review_id, user_id=actor.user_id),
        asynchronous=False,
    )
    return {"helpful_count": helpful_count}
