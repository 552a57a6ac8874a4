"""
Coupon service.

Customer-facing validation (existence, validity window, minimum purchase,
first-order and per-user limits), auto-apply selection and admin CRUD.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from teestore.core.database.base import utc_now
from teestore.core.database.entities.coupons import Coupon
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import BusinessRuleError, ConflictError, NotFoundError
from teestore.core.logging_config import get_logger
from teestore.core.models.domain.enums import CouponDisplayType, OrderStatus
from teestore.core.models.io.coupons import AppliedCoupon, CouponCreate, CouponUpdate

from .pricing import coupon_discount, coupon_is_valid

logger = get_logger(__name__)


def _enum_value(value):
    return getattr(value, "value", value)


class CouponService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def get(self, coupon_id: int) -> Coupon:
        coupon = await self.repos.coupons.get_by_id(coupon_id)
        if coupon is None:
            raise NotFoundError("Coupon", coupon_id)
        return coupon

    async def validate(
        self, code: str, subtotal: float, user_id: Optional[int] = None, now: Optional[datetime] = None
    ) -> Coupon:
        """Check that a coupon can be used on an order of ``subtotal``.

        Raises:
            NotFoundError: If no coupon has this code
            BusinessRuleError: If the coupon is expired, under its minimum or
                exhausted for this customer
        """
        now = now or utc_now()
        coupon = await self.repos.coupons.get_by_code(code)
        if coupon is None:
            raise NotFoundError("Coupon", code.strip().upper())
        if not coupon_is_valid(coupon, now):
            raise BusinessRuleError("Coupon is expired or invalid")
        if subtotal < coupon.minimum_purchase:
            raise BusinessRuleError(f"Minimum purchase of ₹{coupon.minimum_purchase} required for this coupon")

        if user_id is not None:
            if coupon.first_time_only:
                previous = await self.repos.orders.count_for_user(
                    user_id, exclude_statuses=[OrderStatus.cancelled.value]
                )
                if previous > 0:
                    raise BusinessRuleError("This coupon is only valid on your first order")
            used = await self.repos.coupons.count_user_usages(coupon.id, user_id)
            if used >= coupon.user_limit:
                raise BusinessRuleError("You have already used this coupon")
        return coupon

    @staticmethod
    def describe(coupon: Coupon, subtotal: float, now: Optional[datetime] = None) -> AppliedCoupon:
        return AppliedCoupon(
            code=coupon.code,
            description=coupon.description,
            discount_type=coupon.discount_type,
            discount_value=coupon.discount_value,
            discount=coupon_discount(coupon, subtotal, now or utc_now()),
            minimum_purchase=coupon.minimum_purchase,
        )

    async def promotional(self, now: Optional[datetime] = None) -> List[Coupon]:
        now = now or utc_now()
        coupons = await self.repos.coupons.list_current(CouponDisplayType.promotional.value, now)
        return [coupon for coupon in coupons if coupon_is_valid(coupon, now)]

    async def best_auto_apply(
        self, subtotal: float, user_id: Optional[int] = None, now: Optional[datetime] = None
    ) -> Optional[Coupon]:
        """Best auto-apply coupon the customer may use: highest priority, then largest discount."""
        now = now or utc_now()
        candidates = []
        for coupon in await self.repos.coupons.list_current(CouponDisplayType.auto_apply.value, now):
            try:
                await self.validate(coupon.code, subtotal, user_id, now)
            except BusinessRuleError:
                continue
            discount = coupon_discount(coupon, subtotal, now)
            if discount > 0:
                candidates.append((coupon.auto_apply_priority, discount, coupon))
        if not candidates:
            return None
        candidates.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)
        return candidates[0][2]

    async def create(self, data: CouponCreate) -> Coupon:
        if await self.repos.coupons.get_by_code(data.code) is not None:
            raise ConflictError(f"Coupon code '{data.code}' already exists")
        values = {key: _enum_value(value) for key, value in data.model_dump().items()}
        if values.get("valid_from") is None:
            values.pop("valid_from")
        coupon = await self.repos.coupons.create(Coupon(**values))
        logger.info(f"Coupon created: {coupon.code}")
        return coupon

    async def update(self, coupon_id: int, data: CouponUpdate) -> Coupon:
        coupon = await self.get(coupon_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key not in ("max_discount", "usage_limit", "description"):
                continue
            setattr(coupon, key, _enum_value(value))
        return await self.repos.coupons.update(coupon)

    async def delete(self, coupon_id: int) -> None:
        if not await self.repos.coupons.delete(coupon_id):
            raise NotFoundError("Coupon", coupon_id)
