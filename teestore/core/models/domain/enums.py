"""Domain enums for storefront models."""

from __future__ import annotations

from enum import Enum, IntEnum


class UserRole(IntEnum):
    """Account role stored on the user record."""

    customer = 0
    admin = 1


class Size(str, Enum):
    """T-shirt sizes that carry their own stock level."""

    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


class OrderStatus(str, Enum):
    """Fulfilment status of an order."""

    received = "Received"
    processing = "Processing"
    shipped = "Shipped"
    delivered = "Delivered"
    cancelled = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.delivered, OrderStatus.cancelled)


class PaymentMethod(str, Enum):
    """How the customer pays for an order."""

    razorpay = "razorpay"
    cod = "cod"


class PaymentStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"


class DiscountType(str, Enum):
    """How a coupon's ``discount_value`` is interpreted."""

    percentage = "percentage"  # value is a percent of the eligible subtotal
    fixed = "fixed"  # value is a rupee amount


class CouponDisplayType(str, Enum):
    """Where a coupon is surfaced to shoppers."""

    promotional = "promotional"  # listed publicly
    hidden = "hidden"  # only usable by code
    auto_apply = "auto-apply"  # picked automatically at checkout


class DesignPlacement(str, Enum):
    front = "front"
    back = "back"
    left_sleeve = "left-sleeve"
    right_sleeve = "right-sleeve"
    pocket = "pocket"


class RewardTransactionType(str, Enum):
    """Kind of movement recorded in the reward points ledger."""

    earned = "earned"
    redeemed = "redeemed"
    admin_adjustment = "admin_adjustment"
    expired = "expired"
