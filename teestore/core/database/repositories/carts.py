"""
Cart repository.

Data access for a user's cart lines.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.carts import CartItem
from .base import BaseRepository


class CartRepository(BaseRepository[CartItem]):
    """Repository for cart items."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CartItem)

    async def list_for_user(self, user_id: int) -> List[CartItem]:
        """Get a user's cart lines in the order they were added."""
        stmt = select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.added_at, CartItem.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, item_id: int, user_id: int) -> Optional[CartItem]:
        stmt = select(CartItem).where(CartItem.id == item_id, CartItem.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def clear(self, user_id: int) -> int:
        """Remove every line of a user's cart without committing.

        Returns:
            Number of removed lines
        """
        result = await self.session.execute(
            delete(CartItem).where(CartItem.user_id == user_id).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
