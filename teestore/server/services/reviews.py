"""
Review service.

Reviews are unique per (product, user). A review is ``verified`` when its
author has a Delivered or Received order containing the product, and every
change recomputes the product's rating summary.
"""

from __future__ import annotations

import math
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from teestore.core.database.entities.reviews import Review
from teestore.core.database.entities.users import User
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import ConflictError, NotFoundError, PermissionDeniedError
from teestore.core.logging_config import get_logger
from teestore.core.models.domain.enums import OrderStatus
from teestore.core.models.io.reviews import (
    HelpfulToggle,
    ReviewCreate,
    ReviewPage,
    ReviewRead,
    ReviewStats,
    ReviewUpdate,
)

from .incentives import IncentiveService

logger = get_logger(__name__)

VERIFIED_STATUSES = (OrderStatus.delivered.value, OrderStatus.received.value)


class ReviewService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def get(self, review_id: int) -> Review:
        review = await self.repos.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review", review_id)
        return review

    async def to_read(self, review: Review, viewer_id: Optional[int] = None) -> ReviewRead:
        data = ReviewRead.model_validate(review)
        author = await self.repos.users.get_by_id(review.user_id)
        data.user_name = author.name if author is not None else None
        data.helpful_count = review.helpful_count
        data.is_helpful = viewer_id is not None and viewer_id in (review.helpful_user_ids or [])
        return data

    async def stats(self, product_id: int) -> ReviewStats:
        distribution = await self.repos.reviews.rating_distribution(product_id)
        total = sum(distribution.values())
        average = sum(rating * count for rating, count in distribution.items()) / total if total else 0.0
        return ReviewStats(average_rating=round(average, 1), total_reviews=total, distribution=distribution)

    async def list_for_product(
        self, product_id: int, sort: str, page: int, limit: int, viewer_id: Optional[int] = None
    ) -> ReviewPage:
        reviews, total = await self.repos.reviews.list_for_product(
            product_id, sort=sort, limit=limit, offset=(page - 1) * limit
        )
        return ReviewPage(
            reviews=[await self.to_read(review, viewer_id) for review in reviews],
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            total_reviews=total,
            stats=await self.stats(product_id),
        )

    async def _refresh_product_rating(self, product_id: int) -> None:
        product = await self.repos.products.get_by_id(product_id)
        if product is None:
            return
        stats = await self.stats(product_id)
        product.average_rating = stats.average_rating
        product.total_reviews = stats.total_reviews
        await self.repos.products.update(product)

    async def create(self, product_id: int, user: User, data: ReviewCreate) -> Review:
        if not await IncentiveService(self.repos.settings).reviews_enabled():
            raise PermissionDeniedError("Reviews are currently disabled")
        if await self.repos.products.get_available(product_id) is None:
            raise NotFoundError("Product", product_id)
        if await self.repos.reviews.get_for_user(product_id, user.id) is not None:
            raise ConflictError("You have already reviewed this product")

        verified = await self.repos.orders.user_purchased_product(user.id, product_id, VERIFIED_STATUSES)
        review = Review(product_id=product_id, user_id=user.id, verified=verified, **data.model_dump())
        try:
            review = await self.repos.reviews.create(review)
        except IntegrityError as e:
            await self.repos.session.rollback()
            raise ConflictError("You have already reviewed this product") from e

        await self._refresh_product_rating(product_id)
        logger.info(f"Review {review.id} on product {product_id} by user {user.id} (verified={verified})")
        return review

    async def _own(self, review_id: int, user: User) -> Review:
        review = await self.get(review_id)
        if review.user_id != user.id:
            raise PermissionDeniedError("You can only change your own reviews")
        return review

    async def update(self, review_id: int, user: User, data: ReviewUpdate) -> Review:
        review = await self._own(review_id, user)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(review, key, value)
        review = await self.repos.reviews.update(review)
        await self._refresh_product_rating(review.product_id)
        return review

    async def delete(self, review_id: int, user: User) -> None:
        """Delete a review; admins may delete anyone's."""
        review = await self.get(review_id) if user.is_admin else await self._own(review_id, user)
        product_id = review.product_id
        await self.repos.reviews.delete(review.id)
        await self._refresh_product_rating(product_id)

    async def toggle_helpful(self, review_id: int, user: User) -> HelpfulToggle:
        review = await self.get(review_id)
        voters: List[int] = list(review.helpful_user_ids or [])
        if user.id in voters:
            voters.remove(user.id)
        else:
            voters.append(user.id)
        review.helpful_user_ids = voters
        review = await self.repos.reviews.update(review)
        return HelpfulToggle(helpful_count=review.helpful_count, is_helpful=user.id in voters)
