"""Back-office endpoints for review moderation."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.admin.api.schemas import StatusResponse, UpdateReviewRequest
from storefront.catalogue.api.serializers import review_data
from storefront.identity.ability import Ability
from storefront.reviews.review.moderation import ApproveReview, RejectReview
from storefront.reviews.review.review import Review
from storefront.reviews.review.submission import DeleteReview, UpdateReview
from storefront.shared.pagination import paginate
from storefront.web.dependencies import admin_ability

router = APIRouter(prefix="/reviews", tags=["admin: reviews"])

REVIEWS_PER_PAGE = 25


def _review(review_id: str) -> Review:
    return current_domain.repository_for(Review).get(review_id)


@router.get("")
async def list_reviews(
    state: str | None = Query(None, description="pending, approved or rejected"),
    product_id: str | None = None,
    page: int = Query(1, ge=1),
    ability: Ability = Depends(admin_ability),
) -> dict:
    ability.authorize("read", "Review")
    reviews = current_domain.repository_for(Review).everything()
    if state == "pending":
        reviews = [r for r in reviews if r.is_pending()]
    elif state == "approved":
        reviews = [r for r in reviews if r.approved]
    elif state == "rejected":
        reviews = [r for r in reviews if r.rejected]
    if product_id:
        reviews = [r for r in reviews if str(r.product_id) == product_id]

    listing = paginate(reviews, page, REVIEWS_PER_PAGE)
    return {"reviews": [review_data(r) for r in listing.items], "pagination": listing.to_dict()}


@router.get("/{review_id}")
async def show_review(review_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    review = _review(review_id)
    ability.authorize("read", "Review", review)
    return {"review": review_data(review)}


@router.patch("/{review_id}")
async def update_review(review_id: str, body: UpdateReviewRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Review", _review(review_id))
    command = UpdateReview(
        review_id=review_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
        requires_moderation=False,
    )
    current_domain.process(command, asynchronous=False)
    if body.approved is True:
        current_domain.process(ApproveReview(review_id=review_id), asynchronous=False)
    elif body.approved is False:
        current_domain.process(RejectReview(review_id=review_id), asynchronous=False)
    return {"review": review_data(_review(review_id))}


@router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, ability: Ability = Depends(admin_ability)) -> StatusResponse:
    ability.authorize("destroy", "Review", _review(review_id))
    current_domain.process(DeleteReview(review_id=review_id), asynchronous=False)
    return StatusResponse(message="Review was successfully deleted.")


@router.post("/{review_id}/approve")
async def approve_review(review_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Review", _review(review_id))
    current_domain.process(ApproveReview(review_id=review_id), asynchronous=False)
    return {"status": "ok", "message": "Review approved.", "review": review_data(_review(review_id))}


@router.post("/{review_id}/reject")
async def reject_review(review_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Review", _review(review_id))
    current_domain.process(RejectReview(review_id=review_id), asynchronous=False)
    return {"status": "ok", "message": "Review rejected.", "review": review_data(_review(review_id))}
