"""
Incentive Endpoints.

Quantity discounts, free shipping progress and loyalty multipliers shown
around the cart, and the admin editing of their tiers.
"""

from typing import List

from fastapi import APIRouter

from teestore.core.models.io.incentives import (
    CartIncentives,
    FreeShippingConfig,
    FreeShippingUpdate,
    IncentivesRequest,
    LoyaltyConfig,
    LoyaltyTier,
    QuantityDiscountConfig,
    QuantityDiscountTier,
)
from teestore.server.services.deps import AdminUser, ReposDep
from teestore.server.services.incentives import IncentiveService
from teestore.server.services.pricing import PriceLine, cart_incentives, subtotal

router = APIRouter()


@router.post(
    "/calculate",
    response_model=CartIncentives,
    summary="Cart Incentives",
    description="Quantity discount, free shipping progress and loyalty multiplier for a cart snapshot.",
)
async def calculate(data: IncentivesRequest, repos: ReposDep) -> CartIncentives:
    configs = await IncentiveService(repos.settings).load()
    lines = [PriceLine(unit_price=item.price, quantity=item.quantity) for item in data.items]
    total = data.total if data.total is not None else subtotal(lines)
    return cart_incentives(lines, total, configs.quantity, configs.shipping, configs.loyalty)


@router.get("/quantity-discounts", response_model=QuantityDiscountConfig, summary="Quantity Discount Tiers")
async def quantity_tiers(repos: ReposDep) -> QuantityDiscountConfig:
    return await IncentiveService(repos.settings).quantity_config()


@router.put("/quantity-discounts", response_model=QuantityDiscountConfig, summary="Update Quantity Discount Tiers")
async def update_quantity_tiers(
    tiers: List[QuantityDiscountTier], admin: AdminUser, repos: ReposDep
) -> QuantityDiscountConfig:
    return await IncentiveService(repos.settings).update_quantity_tiers(tiers, admin.id)


@router.get("/free-shipping", response_model=FreeShippingConfig, summary="Free Shipping Settings")
async def free_shipping(repos: ReposDep) -> FreeShippingConfig:
    return await IncentiveService(repos.settings).shipping_config()


@router.put("/free-shipping", response_model=FreeShippingConfig, summary="Update Free Shipping Settings")
async def update_free_shipping(data: FreeShippingUpdate, admin: AdminUser, repos: ReposDep) -> FreeShippingConfig:
    return await IncentiveService(repos.settings).update_free_shipping(data, admin.id)


@router.get("/loyalty-multipliers", response_model=LoyaltyConfig, summary="Loyalty Multiplier Tiers")
async def loyalty_tiers(repos: ReposDep) -> LoyaltyConfig:
    return await IncentiveService(repos.settings).loyalty_config()


@router.put("/loyalty-multipliers", response_model=LoyaltyConfig, summary="Update Loyalty Multiplier Tiers")
async def update_loyalty_tiers(tiers: List[LoyaltyTier], admin: AdminUser, repos: ReposDep) -> LoyaltyConfig:
    return await IncentiveService(repos.settings).update_loyalty_tiers(tiers, admin.id)
