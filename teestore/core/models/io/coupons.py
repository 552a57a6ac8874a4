"""
Coupon I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from teestore.core.models.domain.enums import CouponDisplayType, DiscountType


class CouponCreate(BaseModel):
    """Schema for creating a coupon."""

    code: str = Field(min_length=1, max_length=32)
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: float = Field(ge=0)
    minimum_purchase: int = Field(default=0, ge=0)
    max_discount: Optional[int] = Field(default=None, ge=0)
    display_type: CouponDisplayType = CouponDisplayType.hidden
    banner_image: Optional[str] = None
    banner_text: Optional[str] = None
    auto_apply_priority: int = 0
    usage_limit: Optional[int] = Field(default=None, ge=1)
    user_limit: int = Field(default=1, ge=1)
    valid_from: Optional[datetime] = None
    valid_until: datetime
    is_active: bool = True
    applicable_category_ids: List[int] = Field(default_factory=list)
    excluded_product_ids: List[int] = Field(default_factory=list)
    first_time_only: bool = False

    @field_validator("code")
    @classmethod
    def upper_code(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def check_values(self) -> "CouponCreate":
        if self.discount_type == DiscountType.percentage and self.discount_value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        return self


class CouponUpdate(BaseModel):
    description: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(default=None, ge=0)
    minimum_purchase: Optional[int] = Field(default=None, ge=0)
    max_discount: Optional[int] = Field(default=None, ge=0)
    display_type: Optional[CouponDisplayType] = None
    banner_image: Optional[str] = None
    banner_text: Optional[str] = None
    auto_apply_priority: Optional[int] = None
    usage_limit: Optional[int] = Field(default=None, ge=1)
    user_limit: Optional[int] = Field(default=None, ge=1)
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    is_active: Optional[bool] = None
    applicable_category_ids: Optional[List[int]] = None
    excluded_product_ids: Optional[List[int]] = None
    first_time_only: Optional[bool] = None


class CouponRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    description: Optional[str] = None
    discount_type: str
    discount_value: float
    minimum_purchase: int
    max_discount: Optional[int] = None
    display_type: str
    banner_image: Optional[str] = None
    banner_text: Optional[str] = None
    auto_apply_priority: int
    usage_limit: Optional[int] = None
    usage_count: int
    user_limit: int
    valid_from: datetime
    valid_until: datetime
    is_active: bool
    applicable_category_ids: List[int] = Field(default_factory=list)
    excluded_product_ids: List[int] = Field(default_factory=list)
    first_time_only: bool
    created_at: datetime


class PublicCoupon(BaseModel):
    """Coupon fields safe to show to shoppers."""

    model_config = ConfigDict(from_attributes=True)

    code: str
    description: Optional[str] = None
    discount_type: str
    discount_value: float
    minimum_purchase: int
    max_discount: Optional[int] = None
    banner_image: Optional[str] = None
    banner_text: Optional[str] = None
    valid_until: datetime


class CouponValidateRequest(BaseModel):
    code: str = Field(min_length=1)
    subtotal: int = Field(ge=0)


class AppliedCoupon(BaseModel):
    code: str
    description: Optional[str] = None
    discount_type: str
    discount_value: float
    discount: int
    minimum_purchase: int


class CouponValidation(BaseModel):
    valid: bool
    coupon: AppliedCoupon


class AutoApplyRequest(BaseModel):
    subtotal: int = Field(ge=0)
