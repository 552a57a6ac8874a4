"""
Coupon repository.

Data access for coupons and their per-user redemptions.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.coupons import Coupon, CouponUsage
from .base import BaseRepository


class CouponRepository(BaseRepository[Coupon]):
    """Repository for coupons."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Coupon)

    async def get_by_code(self, code: str) -> Optional[Coupon]:
        """Get a coupon by code, ignoring case."""
        result = await self.session.execute(select(Coupon).where(Coupon.code == code.strip().upper()))
        return result.scalar_one_or_none()

    async def list_current(self, display_type: str, now: datetime) -> List[Coupon]:
        """Active coupons of one display type whose validity window contains ``now``."""
        stmt = (
            select(Coupon)
            .where(
                Coupon.display_type == display_type,
                Coupon.is_active == True,  # noqa: E712
                Coupon.valid_from <= now,
                Coupon.valid_until >= now,
            )
            .order_by(Coupon.auto_apply_priority.desc(), Coupon.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_user_usages(self, coupon_id: int, user_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(CouponUsage)
            .where(CouponUsage.coupon_id == coupon_id, CouponUsage.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def record_usage(self, coupon: Coupon, user_id: int, order_id: Optional[int]) -> Optional[CouponUsage]:
        """Count one redemption of the coupon without committing.

        The counter only moves while the coupon is under its usage limit, so
        concurrent orders cannot redeem it past the limit.

        Returns:
            The usage row, or None if the limit was already reached
        """
        result = await self.session.execute(
            update(Coupon)
            .where(
                Coupon.id == coupon.id,
                or_(Coupon.usage_limit.is_(None), Coupon.usage_count < Coupon.usage_limit),
            )
            .values({Coupon.usage_count: Coupon.usage_count + 1})
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        usage = CouponUsage(coupon_id=coupon.id, user_id=user_id, order_id=order_id)
        self.session.add(usage)
        await self.session.flush()
        return usage
