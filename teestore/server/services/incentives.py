"""
Incentive configuration service.

Loads and stores the quantity discount, free shipping and loyalty tier
configurations kept in the settings table, falling back to the built-in
defaults when a setting has never been written.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from teestore.core.database.repositories.store_settings import StoreSettingRepository
from teestore.core.logging_config import get_logger
from teestore.core.models.io.incentives import (
    FreeShippingConfig,
    FreeShippingUpdate,
    LoyaltyConfig,
    LoyaltyTier,
    QuantityDiscountConfig,
    QuantityDiscountTier,
)

logger = get_logger(__name__)

QUANTITY_DISCOUNTS_KEY = "quantity_discounts"
FREE_SHIPPING_KEY = "free_shipping"
LOYALTY_MULTIPLIERS_KEY = "loyalty_multipliers"
REVIEWS_ENABLED_KEY = "reviews_enabled"

AOV_CATEGORY = "aov"


@dataclass(frozen=True)
class IncentiveConfigs:
    quantity: QuantityDiscountConfig
    shipping: FreeShippingConfig
    loyalty: LoyaltyConfig


class IncentiveService:
    """Reads and updates incentive tiers stored as settings."""

    def __init__(self, settings: StoreSettingRepository) -> None:
        self.settings = settings

    async def quantity_config(self) -> QuantityDiscountConfig:
        value = await self.settings.get_value(QUANTITY_DISCOUNTS_KEY)
        return QuantityDiscountConfig.model_validate(value) if value else QuantityDiscountConfig()

    async def shipping_config(self) -> FreeShippingConfig:
        value = await self.settings.get_value(FREE_SHIPPING_KEY)
        return FreeShippingConfig.model_validate(value) if value else FreeShippingConfig()

    async def loyalty_config(self) -> LoyaltyConfig:
        value = await self.settings.get_value(LOYALTY_MULTIPLIERS_KEY)
        return LoyaltyConfig.model_validate(value) if value else LoyaltyConfig()

    async def load(self) -> IncentiveConfigs:
        return IncentiveConfigs(
            quantity=await self.quantity_config(),
            shipping=await self.shipping_config(),
            loyalty=await self.loyalty_config(),
        )

    async def update_quantity_tiers(
        self, tiers: List[QuantityDiscountTier], updated_by: Optional[int] = None
    ) -> QuantityDiscountConfig:
        config = await self.quantity_config()
        config.tiers = sorted(tiers, key=lambda t: t.min_quantity)
        await self.settings.set_value(
            QUANTITY_DISCOUNTS_KEY,
            config.model_dump(),
            description="Quantity-based discount configuration",
            category=AOV_CATEGORY,
            updated_by=updated_by,
        )
        logger.info(f"Quantity discount tiers updated: {[t.min_quantity for t in config.tiers]}")
        return config

    async def update_free_shipping(
        self, update: FreeShippingUpdate, updated_by: Optional[int] = None
    ) -> FreeShippingConfig:
        config = await self.shipping_config()
        if update.threshold is not None:
            config.threshold = update.threshold
        if update.progress_messages is not None:
            config.progress_messages = update.progress_messages
        if update.enabled is not None:
            config.enabled = update.enabled
        await self.settings.set_value(
            FREE_SHIPPING_KEY,
            config.model_dump(),
            description="Free shipping configuration",
            category=AOV_CATEGORY,
            updated_by=updated_by,
        )
        logger.info(f"Free shipping threshold set to {config.threshold}")
        return config

    async def update_loyalty_tiers(self, tiers: List[LoyaltyTier], updated_by: Optional[int] = None) -> LoyaltyConfig:
        config = await self.loyalty_config()
        config.multipliers = sorted(tiers, key=lambda t: t.min_amount)
        await self.settings.set_value(
            LOYALTY_MULTIPLIERS_KEY,
            config.model_dump(),
            description="Loyalty points multiplier configuration",
            category=AOV_CATEGORY,
            updated_by=updated_by,
        )
        return config

    async def reviews_enabled(self) -> bool:
        return bool(await self.settings.get_value(REVIEWS_ENABLED_KEY, True))
