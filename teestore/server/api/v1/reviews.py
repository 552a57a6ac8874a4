"""
Review Endpoints.

Product reviews with rating statistics and helpful votes, and admin
moderation.
"""

from typing import List, Literal

from fastapi import APIRouter, Query, status

from teestore.core.models.io.common import Message
from teestore.core.models.io.reviews import (
    HelpfulToggle,
    ReviewCreate,
    ReviewPage,
    ReviewRead,
    ReviewStats,
    ReviewUpdate,
)
from teestore.server.services.deps import AdminUser, CurrentUser, OptionalUser, ReposDep
from teestore.server.services.reviews import ReviewService

router = APIRouter()

ReviewSort = Literal["newest", "highest", "lowest", "helpful"]


@router.get(
    "/product/{product_id}",
    response_model=ReviewPage,
    summary="Product Reviews",
    description="Paginated reviews with rating statistics. is_helpful reflects the caller's vote.",
)
async def product_reviews(
    product_id: int,
    repos: ReposDep,
    user: OptionalUser,
    sort: ReviewSort = "newest",
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
) -> ReviewPage:
    return await ReviewService(repos).list_for_product(product_id, sort, page, limit, user.id if user else None)


@router.get("/product/{product_id}/stats", response_model=ReviewStats, summary="Rating Statistics")
async def review_stats(product_id: int, repos: ReposDep) -> ReviewStats:
    return await ReviewService(repos).stats(product_id)


@router.post(
    "/product/{product_id}",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Write Review",
    description="One review per product and user; verified when the user bought the product.",
    responses={403: {"description": "Reviews disabled"}, 409: {"description": "Already reviewed"}},
)
async def create_review(product_id: int, data: ReviewCreate, user: CurrentUser, repos: ReposDep) -> ReviewRead:
    service = ReviewService(repos)
    return await service.to_read(await service.create(product_id, user, data), user.id)


@router.get("", response_model=List[ReviewRead], summary="All Reviews")
async def all_reviews(
    admin: AdminUser,
    repos: ReposDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
) -> List[ReviewRead]:
    service = ReviewService(repos)
    reviews, _ = await repos.reviews.list_all(limit=limit, offset=(page - 1) * limit)
    return [await service.to_read(review) for review in reviews]


@router.put(
    "/{review_id}",
    response_model=ReviewRead,
    summary="Edit Review",
    responses={403: {"description": "Not your review"}},
)
async def update_review(review_id: int, data: ReviewUpdate, user: CurrentUser, repos: ReposDep) -> ReviewRead:
    service = ReviewService(repos)
    return await service.to_read(await service.update(review_id, user, data), user.id)


@router.delete(
    "/{review_id}",
    response_model=Message,
    summary="Delete Review",
    description="Authors delete their own reviews; admins can delete any review.",
)
async def delete_review(review_id: int, user: CurrentUser, repos: ReposDep) -> Message:
    await ReviewService(repos).delete(review_id, user)
    return Message(message="Review deleted")


@router.post("/{review_id}/helpful", response_model=HelpfulToggle, summary="Toggle Helpful")
async def toggle_helpful(review_id: int, user: CurrentUser, repos: ReposDep) -> HelpfulToggle:
    return await ReviewService(repos).toggle_helpful(review_id, user)
