"""FastAPI endpoints for reviews."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.access import Actor
from marketplace.api.auth import get_actor
from marketplace.api.presenters import present_review
from marketplace.api.schemas import (
    ApiResponse,
    CreateReviewRequest,
    EditReviewRequest,
    HelpfulVoteRequest,
    ModerateRequest,
    RespondRequest,
)
from marketplace.reviews.editing import EditReview
from marketplace.reviews.moderation import ModerateReview
from marketplace.reviews.queries import list_artisan_reviews, list_product_reviews
from marketplace.reviews.removal import DeleteReview
from marketplace.reviews.response import RespondToReview
from marketplace.reviews.review import Review
from marketplace.reviews.submission import CreateReview
from marketplace.reviews.voting import AddHelpfulVote

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


def _load(review_id) -> Review:
    return current_domain.repository_for(Review).get(review_id)


@router.post("", status_code=201, response_model=ApiResponse)
async def create_review(body: CreateReviewRequest, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    aspects = body.rating.aspects()
    command = CreateReview(
        customer_id=actor.user_id,
        order_id=body.order_id,
        product_id=body.product_id,
        overall_rating=body.rating.overall,
        comment=body.comment,
        title=body.title,
        aspects=json.dumps(aspects) if aspects else None,
        pros=json.dumps(body.pros) if body.pros else None,
        cons=json.dumps(body.cons) if body.cons else None,
        would_recommend=body.would_recommend,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Review created successfully", data={"review": present_review(_load(review_id))})


@router.get("/product/{product_id}", response_model=ApiResponse)
async def product_reviews(
    product_id: str,
    page: int = 1,
    limit: int | None = None,
    rating: int | None = None,
) -> ApiResponse:
    result, distribution = list_product_reviews(product_id, page, limit, rating)
    return ApiResponse(
        data={
            "reviews": [present_review(review) for review in result.items],
            "pagination": result.to_dict(),
            "ratingDistribution": [{"rating": star, "count": count} for star, count in distribution.items()],
        }
    )


@router.get("/artisan/{artisan_id}", response_model=ApiResponse)
async def artisan_reviews(artisan_id: str, page: int = 1, limit: int | None = None) -> ApiResponse:
    result = list_artisan_reviews(artisan_id, page, limit)
    return ApiResponse(
        data={
            "reviews": [present_review(review) for review in result.items],
            "pagination": result.to_dict(),
        }
    )


@router.put("/{review_id}", response_model=ApiResponse)
async def edit_review(
    review_id: str,
    body: EditReviewRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = EditReview(
        review_id=review_id,
        actor_id=actor.user_id,
        overall_rating=body.rating.overall if body.rating else None,
        title=body.title,
        comment=body.comment,
        pros=json.dumps(body.pros) if body.pros is not None else None,
        cons=json.dumps(body.cons) if body.cons is not None else None,
        would_recommend=body.would_recommend,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Review updated successfully", data={"review": present_review(_load(review_id))})


@router.delete("/{review_id}", response_model=ApiResponse)
async def delete_review(review_id: str, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    current_domain.process(DeleteReview(review_id=review_id, actor_id=actor.user_id), asynchronous=False)
    return ApiResponse(message="Review deleted successfully")


@router.post("/{review_id}/helpful", response_model=ApiResponse)
async def vote_helpful(
    review_id: str,
    body: HelpfulVoteRequest | None = None,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = AddHelpfulVote(
        review_id=review_id,
        user_id=actor.user_id,
        helpful=body.helpful if body else True,
    )
    helpful_votes = current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Vote recorded successfully", data={"helpfulVotes": helpful_votes})


@router.post("/{review_id}/respond", response_model=ApiResponse)
async def respond(
    review_id: str,
    body: RespondRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = RespondToReview(review_id=review_id, actor_id=actor.user_id, comment=body.comment)
    current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Response added successfully", data={"review": present_review(_load(review_id))})


@router.put("/{review_id}/moderate", response_model=ApiResponse)
async def moderate(
    review_id: str,
    body: ModerateRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = ModerateReview(
        review_id=review_id,
        actor_id=actor.user_id,
        actor_role=actor.role,
        status=body.status,
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse(message="Review moderated", data={"review": present_review(_load(review_id))})
