"""
Inventory service.

Per-size stock checks, admin stock edits and reports, plus the reservation
and restocking steps used by order placement and cancellation.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from teestore.core.database.entities.orders import OrderItem
from teestore.core.database.entities.products import ALL_SIZES, Product
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import BusinessRuleError, InsufficientStockError, NotFoundError
from teestore.core.logging_config import get_logger
from teestore.core.models.io.products import (
    InventoryCheck,
    InventoryProductEntry,
    InventoryReport,
    InventorySummary,
    LowStockEntry,
)
from teestore.core.monitoring import log_low_stock
from teestore.server.core.config import PricingConfig

logger = get_logger(__name__)


class InventoryService:
    """Stock level queries and movements."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def _product(self, product_id: int) -> Product:
        product = await self.repos.products.get_available(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def check(self, product_id: int, size: str, quantity: int) -> InventoryCheck:
        product = await self._product(product_id)
        stock = product.stock_for(size) if product.offers_size(size) else 0
        return InventoryCheck(
            available=stock >= quantity,
            available_stock=stock,
            size=size,
            product_name=product.name,
        )

    async def set_stock(self, product_id: int, size: str, quantity: int) -> Product:
        product = await self._product(product_id)
        if quantity < 0:
            raise BusinessRuleError("Stock cannot be negative")
        product.set_stock(size, quantity)
        product.refresh_derived()
        logger.info(f"Stock of product {product.id} size {size} set to {quantity}")
        return await self.repos.products.update(product)

    @staticmethod
    def _low_sizes(product: Product) -> List[Tuple[str, int]]:
        return [
            (size, product.stock_for(size))
            for size in ALL_SIZES
            if product.offers_size(size) and product.stock_for(size) <= product.low_stock_threshold
        ]

    async def low_stock(self) -> List[LowStockEntry]:
        """Every (product, size) pair at or below the product's threshold."""
        entries = []
        for product in await self.repos.products.list_not_deleted():
            for size, stock in self._low_sizes(product):
                entries.append(
                    LowStockEntry(
                        product_id=product.id,
                        product_name=product.name,
                        size=size,
                        stock=stock,
                        threshold=product.low_stock_threshold,
                    )
                )
        return entries

    async def report(self) -> InventoryReport:
        products = await self.repos.products.list_not_deleted()
        entries = [
            InventoryProductEntry(
                product_id=product.id,
                product_name=product.name,
                stock=product.size_stock(),
                total_stock=product.total_stock,
                sold=product.sold,
                value=product.total_stock * product.price,
            )
            for product in products
        ]
        summary = InventorySummary(
            total_products=len(products),
            total_units=sum(entry.total_stock for entry in entries),
            total_value=sum(entry.value for entry in entries),
            out_of_stock=sum(1 for product in products if product.total_stock == 0),
            low_stock=sum(1 for product in products if self._low_sizes(product)),
        )
        return InventoryReport(summary=summary, products=entries)

    async def reserve(self, items: Iterable[OrderItem], pricing: PricingConfig) -> None:
        """Take ordered units out of stock inside the caller's transaction.

        Custom items are printed on demand and hold no stock. On shortage the
        error propagates and the caller rolls back.

        Raises:
            InsufficientStockError: If any (product, size) cannot cover its count
        """
        for item in items:
            if item.is_custom or item.product_id is None:
                continue
            product = await self.repos.products.decrement_stock(item.product_id, item.size, item.count)
            if product is None:
                current = await self.repos.products.get_by_id(item.product_id)
                available = current.stock_for(item.size) if current is not None else 0
                raise InsufficientStockError(item.name, item.size, available, item.count)

            remaining = product.stock_for(item.size)
            if remaining <= pricing.low_stock_alert_level:
                logger.warning(f"Low stock: product {product.id} ({product.name}) size {item.size} has {remaining} left")
                log_low_stock(product.id, product.name, item.size, remaining)

    async def restock(self, items: Iterable[OrderItem]) -> None:
        """Put the units of cancelled items back, without committing."""
        for item in items:
            if item.is_custom or item.product_id is None:
                continue
            await self.repos.products.increment_stock(item.product_id, item.size, item.count)
