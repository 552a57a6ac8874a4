"""
Category repository.

Data access for the category tree: main categories, subcategories and
lookups by name or slug.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.categories import Category
from .base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for categories."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Category)

    async def get_by_name(self, name: str) -> Optional[Category]:
        result = await self.session.execute(select(Category).where(Category.name == name))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        result = await self.session.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Category]:
        result = await self.session.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def list_main(self, active_only: bool = True) -> List[Category]:
        """Get categories without a parent, ordered by name."""
        stmt = select(Category).where(Category.parent_id.is_(None))
        if active_only:
            stmt = stmt.where(Category.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt.order_by(Category.name))
        return list(result.scalars().all())

    async def list_children(self, parent_id: int, active_only: bool = True) -> List[Category]:
        """Get the direct subcategories of a category, ordered by name."""
        stmt = select(Category).where(Category.parent_id == parent_id)
        if active_only:
            stmt = stmt.where(Category.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt.order_by(Category.name))
        return list(result.scalars().all())

    async def count_children(self, parent_id: int) -> int:
        stmt = select(func.count()).select_from(Category).where(Category.parent_id == parent_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
