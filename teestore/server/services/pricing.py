"""
Checkout pricing engine.

Pure functions that turn priced cart lines into a full price breakdown.
Discounts are applied progressively, each on the amount left by the
previous ones:

1. quantity discount on the subtotal
2. coupon discount on what the quantity discount leaves
3. reward points, capped per order and by the remaining amount
4. online payment discount on the amount after steps 1 and 2
5. shipping, waived when the discounted merchandise total reaches the
   free shipping threshold

Nothing here touches the database; callers load the tier configuration and
coupon beforehand.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from teestore.core.database.entities.coupons import Coupon
from teestore.core.models.domain.enums import DiscountType, PaymentMethod
from teestore.core.models.io.incentives import (
    CartIncentives,
    CheckoutQuote,
    FreeShippingConfig,
    LoyaltyConfig,
    LoyaltyReward,
    QuantityDiscount,
    QuantityDiscountConfig,
    ShippingProgress,
)
from teestore.server.core.config import PricingConfig


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class PriceLine:
    """A priced line as seen by the pricing engine."""

    unit_price: int
    quantity: int
    product_id: Optional[int] = None
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


def subtotal(lines: Sequence[PriceLine]) -> int:
    return sum(line.line_total for line in lines)


def total_quantity(lines: Sequence[PriceLine]) -> int:
    return sum(line.quantity for line in lines)


def quantity_discount(lines: Sequence[PriceLine], config: QuantityDiscountConfig) -> QuantityDiscount:
    """Discount for buying several items, from the highest tier reached."""
    if not config.enabled or not lines:
        return QuantityDiscount()

    quantity = total_quantity(lines)
    tier = next(
        (t for t in sorted(config.tiers, key=lambda t: t.min_quantity, reverse=True) if quantity >= t.min_quantity),
        None,
    )
    if tier is None:
        return QuantityDiscount(total_quantity=quantity)

    discount = round_half_up(subtotal(lines) * tier.discount / 100)
    return QuantityDiscount(
        discount=discount,
        percentage=tier.discount,
        tier=tier,
        total_quantity=quantity,
        message=f"{tier.discount}% off for buying {quantity} items!",
    )


def shipping_progress(total: float, config: FreeShippingConfig) -> ShippingProgress:
    """How far a cart total is from free shipping."""
    if not config.enabled:
        return ShippingProgress()

    threshold = config.threshold
    qualified = total >= threshold
    remaining = max(0, math.ceil(threshold - total))
    progress = 100 if threshold <= 0 else min(100, round_half_up(total / threshold * 100))

    messages = config.progress_messages
    if qualified:
        message = messages.achieved
    elif remaining <= config.close_range:
        message = messages.close.replace("{amount}", str(remaining))
    else:
        message = messages.far.replace("{amount}", str(remaining))

    return ShippingProgress(
        qualified=qualified,
        remaining=remaining,
        progress=progress,
        message=message,
        threshold=threshold,
    )


def loyalty_reward(amount: float, config: LoyaltyConfig) -> LoyaltyReward:
    """Reward points earned for an order amount, with tier multipliers."""
    base_points = int(max(amount, 0) // config.rupees_per_point)
    if not config.enabled:
        return LoyaltyReward(base_points=base_points, total_points=base_points)

    tier = next(
        (t for t in sorted(config.multipliers, key=lambda t: t.min_amount, reverse=True) if amount >= t.min_amount),
        None,
    )
    if tier is None:
        return LoyaltyReward(base_points=base_points, total_points=base_points)

    total_points = base_points * tier.multiplier
    bonus = total_points - base_points
    return LoyaltyReward(
        multiplier=tier.multiplier,
        bonus=bonus,
        tier=tier,
        base_points=base_points,
        total_points=total_points,
        message=f"{tier.multiplier}X points earned! (+{bonus} bonus points)",
    )


def cart_incentives(
    lines: Sequence[PriceLine],
    total: float,
    quantity_config: QuantityDiscountConfig,
    shipping_config: FreeShippingConfig,
    loyalty_config: LoyaltyConfig,
) -> CartIncentives:
    """All volume incentives shown next to a cart."""
    quantity = quantity_discount(lines, quantity_config)
    return CartIncentives(
        quantity_discount=quantity,
        shipping_progress=shipping_progress(total, shipping_config),
        loyalty_multiplier=loyalty_reward(total, loyalty_config),
        total_savings=quantity.discount,
        final_amount=round_half_up(total - quantity.discount),
    )


def coupon_is_valid(coupon: Coupon, now: datetime) -> bool:
    """Active, inside its validity window and below its global usage limit."""
    if not coupon.is_active:
        return False
    if now < coupon.valid_from or now > coupon.valid_until:
        return False
    if coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit:
        return False
    return True


def discount_for_amount(
    discount_type: str, discount_value: float, base: float, max_discount: Optional[int] = None
) -> int:
    """Coupon discount on ``base``, never more than ``base`` itself.

    Percentages are floored, then capped by ``max_discount``.
    """
    if base <= 0 or discount_value <= 0:
        return 0
    if discount_type == DiscountType.percentage.value:
        discount = math.floor(base * discount_value / 100)
        if max_discount:
            discount = min(discount, max_discount)
    else:
        discount = int(discount_value)
    return int(min(discount, math.floor(base)))


def coupon_discount(coupon: Coupon, amount: float, now: datetime) -> int:
    """Discount a coupon grants on ``amount``; 0 when invalid or under the minimum."""
    if not coupon_is_valid(coupon, now):
        return 0
    if amount < coupon.minimum_purchase:
        return 0
    return discount_for_amount(coupon.discount_type, coupon.discount_value, amount, coupon.max_discount)


def coupon_eligible_subtotal(coupon: Coupon, lines: Sequence[PriceLine]) -> int:
    """Subtotal of the lines a coupon applies to.

    Custom items have no category and only count for coupons without a
    category restriction.
    """
    categories = set(coupon.applicable_category_ids or [])
    excluded = set(coupon.excluded_product_ids or [])
    eligible = 0
    for line in lines:
        if line.product_id is not None and line.product_id in excluded:
            continue
        if categories and line.category_id not in categories and line.subcategory_id not in categories:
            continue
        eligible += line.line_total
    return eligible


def reward_redemption(
    requested: int, balance: int, remaining: float, config: PricingConfig
) -> tuple[int, float]:
    """Points actually redeemed and the rupee discount they give."""
    if requested <= 0 or balance <= 0 or remaining <= 0 or config.reward_point_value <= 0:
        return 0, 0.0
    affordable = math.floor(remaining / config.reward_point_value)
    points = max(0, min(requested, balance, config.max_reward_points_per_order, affordable))
    return points, points * config.reward_point_value


def online_payment_discount(amount: float, percent: float) -> int:
    if amount <= 0 or percent <= 0:
        return 0
    return round_half_up(amount * percent / 100)


def build_quote(
    lines: Sequence[PriceLine],
    *,
    pricing: PricingConfig,
    quantity_config: QuantityDiscountConfig,
    shipping_config: FreeShippingConfig,
    loyalty_config: LoyaltyConfig,
    payment_method: PaymentMethod,
    shipping_rate: int = 0,
    coupon: Optional[Coupon] = None,
    reward_points_requested: int = 0,
    reward_balance: int = 0,
    now: Optional[datetime] = None,
) -> CheckoutQuote:
    """Price a prospective order.

    The coupon is expected to have been validated for the customer already;
    here it only contributes its discount.
    """
    gross = subtotal(lines)
    quantity = quantity_discount(lines, quantity_config)
    after_quantity = gross - quantity.discount

    coupon_amount = 0
    if coupon is not None and now is not None and coupon_is_valid(coupon, now) and gross >= coupon.minimum_purchase:
        eligible = coupon_eligible_subtotal(coupon, lines)
        if eligible == gross:
            base: float = after_quantity
        else:
            base = eligible - eligible * quantity.percentage / 100
        coupon_amount = discount_for_amount(coupon.discount_type, coupon.discount_value, base, coupon.max_discount)
    after_coupon = after_quantity - coupon_amount

    points, reward_amount = reward_redemption(reward_points_requested, reward_balance, after_coupon, pricing)

    online_amount = 0
    if payment_method == PaymentMethod.razorpay:
        online_amount = online_payment_discount(after_coupon, pricing.online_payment_discount_percent)

    merchandise = max(0.0, after_coupon - reward_amount - online_amount)
    free_shipping = shipping_progress(after_coupon, shipping_config)
    shipping_cost = 0 if free_shipping.qualified else shipping_rate

    amount = merchandise + shipping_cost
    return CheckoutQuote(
        subtotal=gross,
        item_count=total_quantity(lines),
        quantity_discount=quantity.discount,
        quantity_discount_percentage=quantity.percentage,
        coupon_code=coupon.code if coupon is not None and coupon_amount > 0 else None,
        coupon_discount=coupon_amount,
        reward_points_redeemed=points,
        reward_discount=reward_amount,
        online_payment_discount=online_amount,
        shipping_cost=shipping_cost,
        amount=amount,
        total_savings=quantity.discount + coupon_amount + reward_amount + online_amount,
        reward_points_to_earn=loyalty_reward(merchandise, loyalty_config).total_points,
        free_shipping=free_shipping,
    )
