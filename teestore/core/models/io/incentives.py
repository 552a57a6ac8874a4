"""
Incentive and checkout pricing I/O models.

Tier configurations are persisted as store settings; the result models
describe how a cart or order is priced.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class QuantityDiscountTier(BaseModel):
    min_quantity: int = Field(ge=1)
    discount: int = Field(ge=0, le=100, description="Percent off the subtotal")
    label: str = ""


class QuantityDiscountConfig(BaseModel):
    """Setting ``quantity_discounts``."""

    enabled: bool = True
    tiers: List[QuantityDiscountTier] = Field(
        default_factory=lambda: [
            QuantityDiscountTier(min_quantity=3, discount=10, label="10% off on 3+ items"),
            QuantityDiscountTier(min_quantity=5, discount=15, label="15% off on 5+ items"),
            QuantityDiscountTier(min_quantity=8, discount=20, label="20% off on 8+ items"),
        ]
    )


class ShippingMessages(BaseModel):
    far: str = "Add ₹{amount} more for FREE shipping!"
    close: str = "Only ₹{amount} away from FREE shipping!"
    achieved: str = "Congratulations! You qualify for FREE shipping!"


class FreeShippingConfig(BaseModel):
    """Setting ``free_shipping``."""

    enabled: bool = True
    threshold: int = Field(default=999, ge=0)
    close_range: int = Field(default=200, ge=0, description="Remaining amount under which the close message shows")
    progress_messages: ShippingMessages = Field(default_factory=ShippingMessages)


class LoyaltyTier(BaseModel):
    min_amount: int = Field(ge=0)
    multiplier: int = Field(ge=1)
    label: str = ""


class LoyaltyConfig(BaseModel):
    """Setting ``loyalty_multipliers``."""

    enabled: bool = True
    rupees_per_point: int = Field(default=10, ge=1, description="Spend that earns one base point")
    multipliers: List[LoyaltyTier] = Field(
        default_factory=lambda: [
            LoyaltyTier(min_amount=3000, multiplier=2, label="2X points on orders ₹3000+"),
            LoyaltyTier(min_amount=5000, multiplier=3, label="3X points on orders ₹5000+"),
        ]
    )


class QuantityDiscount(BaseModel):
    discount: int = 0
    percentage: int = 0
    tier: Optional[QuantityDiscountTier] = None
    total_quantity: int = 0
    message: str = ""


class ShippingProgress(BaseModel):
    qualified: bool = False
    remaining: int = 0
    progress: int = Field(default=0, description="Percent of the threshold reached, 0 to 100")
    message: str = ""
    threshold: int = 0


class LoyaltyReward(BaseModel):
    multiplier: int = 1
    bonus: int = 0
    tier: Optional[LoyaltyTier] = None
    base_points: int = 0
    total_points: int = 0
    message: str = ""


class CartIncentives(BaseModel):
    quantity_discount: QuantityDiscount
    shipping_progress: ShippingProgress
    loyalty_multiplier: LoyaltyReward
    total_savings: int
    final_amount: int


class IncentiveLine(BaseModel):
    price: int = Field(ge=0)
    quantity: int = Field(default=1, ge=1)


class IncentivesRequest(BaseModel):
    """Cart snapshot for which incentives are computed."""

    items: List[IncentiveLine]
    total: Optional[int] = Field(default=None, description="Cart total, defaults to the sum of the lines")


class FreeShippingUpdate(BaseModel):
    threshold: Optional[int] = Field(default=None, ge=0)
    progress_messages: Optional[ShippingMessages] = None
    enabled: Optional[bool] = None


class CheckoutQuote(BaseModel):
    """Full price breakdown of a prospective order."""

    subtotal: int
    item_count: int
    quantity_discount: int
    quantity_discount_percentage: int
    coupon_code: Optional[str] = None
    coupon_discount: int = 0
    reward_points_redeemed: int = 0
    reward_discount: float = 0
    online_payment_discount: int = 0
    shipping_cost: int = 0
    amount: float
    total_savings: float
    reward_points_to_earn: int = 0
    free_shipping: ShippingProgress
