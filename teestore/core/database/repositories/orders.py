"""
Order repository.

Data access for orders and their items, including the purchase history
checks used by coupons and reviews.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.orders import Order, OrderItem
from .base import BaseRepository, QueryBuilder


class OrderRepository(BaseRepository[Order]):
    """Repository for orders and order items."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Order)

    async def list_for_user(self, user_id: int) -> List[Order]:
        """Get a user's orders, newest first."""
        stmt = select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc(), Order.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_filtered(
        self, status: Optional[str] = None, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> Tuple[List[Order], int]:
        """Get all orders, optionally with one status, newest first.

        Returns:
            The requested page and the total number of matches
        """
        stmt = select(Order)
        if status:
            stmt = stmt.where(Order.status == status)

        total_result = await self.session.execute(select(func.count()).select_from(stmt.subquery()))
        total = int(total_result.scalar_one())

        stmt = QueryBuilder.apply_pagination(stmt.order_by(Order.created_at.desc(), Order.id.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_by_gateway_order_id(self, gateway_order_id: str) -> Optional[Order]:
        result = await self.session.execute(select(Order).where(Order.gateway_order_id == gateway_order_id))
        return result.scalars().first()

    async def get_items(self, order_id: int) -> List[OrderItem]:
        result = await self.session.execute(
            select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        )
        return list(result.scalars().all())

    async def add_item(self, item: OrderItem) -> OrderItem:
        self.session.add(item)
        await self.session.flush()
        return item

    async def count_for_user(self, user_id: int, exclude_statuses: Sequence[str] = ()) -> int:
        """Count a user's orders, ignoring the given statuses."""
        stmt = select(func.count()).select_from(Order).where(Order.user_id == user_id)
        if exclude_statuses:
            stmt = stmt.where(Order.status.not_in(list(exclude_statuses)))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def user_purchased_product(self, user_id: int, product_id: int, statuses: Sequence[str]) -> bool:
        """Whether the user has an order in one of ``statuses`` containing the product."""
        stmt = (
            select(func.count())
            .select_from(OrderItem)
            .join(Order, Order.id == OrderItem.order_id)
            .where(
                Order.user_id == user_id,
                OrderItem.product_id == product_id,
                Order.status.in_(list(statuses)),
            )
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one()) > 0
