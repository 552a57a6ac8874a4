"""Domain-level value types shared by entities, services and schemas."""

from .enums import (
    CouponDisplayType,
    DiscountType,
    DesignPlacement,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    RewardTransactionType,
    Size,
    UserRole,
)

__all__ = [
    "CouponDisplayType",
    "DesignPlacement",
    "DiscountType",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "RewardTransactionType",
    "Size",
    "UserRole",
]
