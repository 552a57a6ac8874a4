"""Wishlist repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.wishlists import WishlistItem
from .base import BaseRepository


class WishlistRepository(BaseRepository[WishlistItem]):
    """Repository for wishlist items."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, WishlistItem)

    async def list_for_user(self, user_id: int) -> List[WishlistItem]:
        stmt = select(WishlistItem).where(WishlistItem.user_id == user_id).order_by(WishlistItem.added_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, user_id: int, product_id: int) -> Optional[WishlistItem]:
        stmt = select(WishlistItem).where(WishlistItem.user_id == user_id, WishlistItem.product_id == product_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def clear(self, user_id: int) -> int:
        result = await self.session.execute(
            delete(WishlistItem).where(WishlistItem.user_id == user_id).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
