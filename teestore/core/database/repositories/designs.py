"""
Design repository.

Data access for studio artwork: listing with filters, popularity queries and
counter updates (views, likes, usage).
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import String, case, cast, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.designs import Design
from .base import BaseRepository, QueryBuilder

SORT_ORDERS = {
    "newest": (Design.created_at.desc(), Design.id.desc()),
    "popular": (Design.used.desc(), Design.id.desc()),
    "likes": (Design.likes.desc(), Design.id.desc()),
    "name": (Design.name.asc(),),
}


class DesignRepository(BaseRepository[Design]):
    """Repository for designs."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Design)

    @staticmethod
    def _active():
        return select(Design).where(Design.is_active == True)  # noqa: E712

    async def get_by_slug(self, slug: str) -> Optional[Design]:
        result = await self.session.execute(select(Design).where(Design.slug == slug))
        return result.scalar_one_or_none()

    async def search(
        self,
        *,
        category_id: Optional[int] = None,
        tag: Optional[str] = None,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
        sort: str = "newest",
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[Design], int]:
        """List active designs matching the filters.

        Returns:
            The requested page and the total number of matches
        """
        stmt = self._active()
        if category_id is not None:
            stmt = stmt.where(Design.category_id == category_id)
        if tag:
            stmt = stmt.where(cast(Design.tags, String).ilike(f'%"{tag.strip().lower()}"%'))
        if featured is not None:
            stmt = stmt.where(Design.is_featured == featured)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    Design.name.ilike(pattern),
                    Design.description.ilike(pattern),
                    cast(Design.tags, String).ilike(pattern),
                )
            )

        total_result = await self.session.execute(select(func.count()).select_from(stmt.subquery()))
        total = int(total_result.scalar_one())

        stmt = stmt.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"]))
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def popular(self, limit: int = 10) -> List[Design]:
        result = await self.session.execute(self._active().order_by(Design.used.desc(), Design.likes.desc()).limit(limit))
        return list(result.scalars().all())

    async def featured(self, limit: int = 10) -> List[Design]:
        stmt = self._active().where(Design.is_featured == True).order_by(Design.created_at.desc())  # noqa: E712
        result = await self.session.execute(stmt.limit(limit))
        return list(result.scalars().all())

    async def random(self) -> Optional[Design]:
        result = await self.session.execute(self._active().order_by(func.random()).limit(1))
        return result.scalars().first()

    async def all_tags(self) -> List[str]:
        """Distinct tags across active designs, sorted."""
        result = await self.session.execute(select(Design.tags).where(Design.is_active == True))  # noqa: E712
        tags = {tag for row in result.scalars().all() for tag in (row or [])}
        return sorted(tags)

    async def increment_views(self, design_id: int) -> None:
        await self._increment(design_id, Design.views, 1)

    async def change_likes(self, design_id: int, delta: int) -> None:
        """Add ``delta`` to the like counter without going below zero."""
        stmt = (
            update(Design)
            .where(Design.id == design_id)
            .values({Design.likes: case((Design.likes + delta < 0, 0), else_=Design.likes + delta)})
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def increment_used(self, design_id: int, count: int = 1) -> None:
        await self._increment(design_id, Design.used, count)

    async def _increment(self, design_id: int, column, amount: int) -> None:
        stmt = (
            update(Design)
            .where(Design.id == design_id)
            .values({column: column + amount})
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
