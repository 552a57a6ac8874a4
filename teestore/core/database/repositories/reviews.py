"""
Review repository.

Data access for product reviews and their rating statistics.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.reviews import Review
from .base import BaseRepository, QueryBuilder

SORT_ORDERS = {
    "newest": (Review.created_at.desc(), Review.id.desc()),
    "highest": (Review.rating.desc(), Review.created_at.desc()),
    "lowest": (Review.rating.asc(), Review.created_at.desc()),
}


class ReviewRepository(BaseRepository[Review]):
    """Repository for reviews."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Review)

    async def get_for_user(self, product_id: int, user_id: int) -> Optional[Review]:
        stmt = select(Review).where(Review.product_id == product_id, Review.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_product(
        self, product_id: int, sort: str = "newest", limit: Optional[int] = None, offset: Optional[int] = None
    ) -> Tuple[List[Review], int]:
        """Get a product's reviews.

        ``helpful`` sorting depends on the JSON list length, so it is applied
        in Python over the full set before paginating.

        Returns:
            The requested page and the total number of reviews
        """
        base = select(Review).where(Review.product_id == product_id)
        total_result = await self.session.execute(select(func.count()).select_from(base.subquery()))
        total = int(total_result.scalar_one())

        if sort == "helpful":
            result = await self.session.execute(base.order_by(Review.created_at.desc()))
            reviews = sorted(result.scalars().all(), key=lambda r: r.helpful_count, reverse=True)
            start = offset or 0
            end = start + limit if limit is not None else None
            return reviews[start:end], total

        stmt = QueryBuilder.apply_pagination(base.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"])), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def list_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> Tuple[List[Review], int]:
        total = await self.count()
        stmt = QueryBuilder.apply_pagination(select(Review).order_by(Review.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def rating_distribution(self, product_id: int) -> Dict[int, int]:
        """Number of reviews per star rating, every rating from 5 to 1 present."""
        stmt = (
            select(Review.rating, func.count())
            .where(Review.product_id == product_id)
            .group_by(Review.rating)
        )
        result = await self.session.execute(stmt)
        distribution = {rating: 0 for rating in (5, 4, 3, 2, 1)}
        for rating, count in result.all():
            distribution[int(rating)] = int(count)
        return distribution
