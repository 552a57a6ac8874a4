"""
Coupon entity models.

Coupons are either percentage or fixed rupee discounts with optional
minimum purchase, cap, validity window, global and per-user usage limits.
Every redemption is recorded in ``coupon_usages``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Coupon(Base, table=True):
    """Discount coupon.

    Table: coupons
    """

    __tablename__ = "coupons"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(max_length=32, unique=True, index=True)
    description: Optional[str] = Field(default=None, max_length=255)

    discount_type: str = Field(max_length=16, description="percentage | fixed")
    discount_value: float = Field(ge=0)
    minimum_purchase: int = Field(default=0)
    max_discount: Optional[int] = Field(default=None)

    # Presentation
    display_type: str = Field(default="hidden", max_length=16, description="promotional | hidden | auto-apply")
    banner_image: Optional[str] = Field(default=None, max_length=1024)
    banner_text: Optional[str] = Field(default=None, max_length=255)
    auto_apply_priority: int = Field(default=0)

    # Usage limits
    usage_limit: Optional[int] = Field(default=None)
    usage_count: int = Field(default=0)
    user_limit: int = Field(default=1)

    valid_from: datetime = Field(default_factory=utc_now)
    valid_until: datetime
    is_active: bool = Field(default=True)

    # Restrictions
    applicable_category_ids: List[int] = Field(default_factory=list, sa_type=JSON)
    excluded_product_ids: List[int] = Field(default_factory=list, sa_type=JSON)
    first_time_only: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Coupon(code={self.code}, type={self.discount_type}, value={self.discount_value})"


class CouponUsage(Base, table=True):
    """One redemption of a coupon by a user.

    Table: coupon_usages
    """

    __tablename__ = "coupon_usages"

    id: Optional[int] = Field(default=None, primary_key=True)
    coupon_id: int = Field(foreign_key="coupons.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    order_id: Optional[int] = Field(default=None, foreign_key="orders.id")
    used_at: datetime = Field(default_factory=utc_now)
