"""
Cart service.

Lines are priced on the server: catalogue lines take the current product
price, custom t-shirts are priced from their blank plus one surcharge per
placed design. The same resolution is reused by checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from teestore.core.database.base import utc_now
from teestore.core.database.entities.carts import CartItem
from teestore.core.database.entities.orders import OrderItem
from teestore.core.database.entities.products import Product
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import BusinessRuleError, NotFoundError
from teestore.core.logging_config import get_logger
from teestore.core.models.io.carts import CartItemCreate, CartItemRead, CartRead, Customization
from teestore.server.core.config import PricingConfig

from .pricing import PriceLine

logger = get_logger(__name__)

CUSTOM_ITEM_NAME = "Custom T-Shirt"


@dataclass
class ResolvedLine:
    """A cart or order line with its server-side unit price."""

    name: str
    size: str
    unit_price: int
    quantity: int
    color: Optional[str] = None
    photo_url: Optional[str] = None
    product: Optional[Product] = None
    is_custom: bool = False
    customization: Optional[Dict[str, Any]] = None
    design_ids: List[int] = field(default_factory=list)

    @property
    def product_id(self) -> Optional[int]:
        return self.product.id if self.product is not None and not self.is_custom else None

    def price_line(self) -> PriceLine:
        if self.is_custom or self.product is None:
            return PriceLine(unit_price=self.unit_price, quantity=self.quantity)
        return PriceLine(
            unit_price=self.unit_price,
            quantity=self.quantity,
            product_id=self.product.id,
            category_id=self.product.category_id,
            subcategory_id=self.product.subcategory_id,
        )

    def order_item(self, order_id: int) -> OrderItem:
        return OrderItem(
            order_id=order_id,
            product_id=self.product_id,
            name=self.name,
            size=self.size,
            color=self.color,
            price=self.unit_price,
            count=self.quantity,
            photo_url=self.photo_url,
            is_custom=self.is_custom,
            customization=self.customization,
        )


def _primary_image(product: Product) -> Optional[str]:
    images = product.images or []
    primary = next((image for image in images if image.get("is_primary")), images[0] if images else None)
    return primary.get("url") if primary else None


class CartService:
    """Cart operations for one signed-in user at a time."""

    def __init__(self, repos: RepoBundle, pricing: PricingConfig) -> None:
        self.repos = repos
        self.pricing = pricing

    # ------------------------------------------------------------------
    # Line resolution
    # ------------------------------------------------------------------

    async def _orderable_product(self, product_id: int, size: str) -> Product:
        product = await self.repos.products.get_available(product_id)
        if product is None or not product.is_active:
            raise NotFoundError("Product", product_id)
        if not product.offers_size(size):
            raise BusinessRuleError(f"Size {size} is not available for {product.name}")
        return product

    async def _design_price(self, placed: Dict[str, Any], design_ids: List[int]) -> int:
        design_id = placed.get("design_id")
        if design_id is None:
            return self.pricing.design_fee
        design = await self.repos.designs.get_by_id(design_id)
        if design is None or not design.is_active:
            raise NotFoundError("Design", design_id)
        design_ids.append(design.id)
        if not placed.get("design_image"):
            placed["design_image"] = design.image_url
        return design.price if design.price > 0 else self.pricing.design_fee

    async def _resolve_custom(self, customization: Customization, data: CartItemCreate) -> ResolvedLine:
        blank: Optional[Product] = None
        base_price = self.pricing.custom_tshirt_base_price
        if customization.selected_product_id is not None:
            blank = await self._orderable_product(customization.selected_product_id, data.size.value)
            base_price = blank.price

        stored = customization.model_dump()
        design_ids: List[int] = []
        unit_price = base_price
        for side in ("front_design", "back_design"):
            placed = stored.get(side)
            if placed is None:
                continue
            placed["price"] = await self._design_price(placed, design_ids)
            unit_price += placed["price"]

        return ResolvedLine(
            name=data.name or CUSTOM_ITEM_NAME,
            size=data.size.value,
            unit_price=unit_price,
            quantity=data.quantity,
            color=data.color,
            photo_url=data.photo_url,
            product=blank,
            is_custom=True,
            customization=stored,
            design_ids=design_ids,
        )

    async def resolve(self, data: CartItemCreate) -> ResolvedLine:
        """Price a requested line. Client prices are never trusted."""
        if data.customization is not None:
            return await self._resolve_custom(data.customization, data)

        product = await self._orderable_product(data.product_id, data.size.value)
        return ResolvedLine(
            name=product.name,
            size=data.size.value,
            unit_price=product.price,
            quantity=data.quantity,
            color=data.color,
            photo_url=data.photo_url or _primary_image(product),
            product=product,
        )

    async def resolve_cart(self, user_id: int) -> List[ResolvedLine]:
        """Re-price every line of a stored cart at current prices."""
        lines = []
        for item in await self.repos.carts.list_for_user(user_id):
            lines.append(await self.resolve(self._as_request(item)))
        return lines

    @staticmethod
    def _as_request(item: CartItem) -> CartItemCreate:
        return CartItemCreate(
            product_id=None if item.is_custom else item.product_id,
            customization=Customization.model_validate(item.customization) if item.is_custom else None,
            name=item.name if item.is_custom else None,
            photo_url=item.photo_url,
            size=item.size,
            color=item.color,
            quantity=item.quantity,
        )

    # ------------------------------------------------------------------
    # Cart operations
    # ------------------------------------------------------------------

    async def get_cart(self, user_id: int) -> CartRead:
        items = await self.repos.carts.list_for_user(user_id)
        return CartRead(
            items=[CartItemRead.model_validate(item) for item in items],
            total=sum(item.line_total for item in items),
            item_count=sum(item.quantity for item in items),
        )

    @staticmethod
    def _matches(item: CartItem, line: ResolvedLine) -> bool:
        if item.size != line.size or item.color != line.color or item.is_custom != line.is_custom:
            return False
        if line.is_custom:
            return _same_customization(item.customization, line.customization)
        return item.product_id == line.product_id

    async def _add_line(self, user_id: int, line: ResolvedLine) -> CartItem:
        for item in await self.repos.carts.list_for_user(user_id):
            if self._matches(item, line):
                item.quantity += line.quantity
                item.price = line.unit_price
                item.updated_at = utc_now()
                self.repos.session.add(item)
                await self.repos.session.flush()
                return item

        item = CartItem(
            user_id=user_id,
            product_id=line.product_id,
            is_custom=line.is_custom,
            customization=line.customization,
            name=line.name,
            photo_url=line.photo_url,
            size=line.size,
            color=line.color,
            price=line.unit_price,
            quantity=line.quantity,
        )
        return await self.repos.carts.add(item)

    async def add(self, user_id: int, data: CartItemCreate) -> CartItem:
        line = await self.resolve(data)
        item = await self._add_line(user_id, line)
        await self.repos.session.commit()
        await self.repos.session.refresh(item)
        return item

    async def update_quantity(self, user_id: int, item_id: int, quantity: int) -> Optional[CartItem]:
        """Set a line's quantity; 0 removes the line and returns None."""
        item = await self.repos.carts.get_for_user(item_id, user_id)
        if item is None:
            raise NotFoundError("Cart item", item_id)
        if quantity == 0:
            await self.repos.carts.delete(item.id)
            return None
        item.quantity = quantity
        return await self.repos.carts.update(item)

    async def remove(self, user_id: int, item_id: int) -> None:
        item = await self.repos.carts.get_for_user(item_id, user_id)
        if item is None:
            raise NotFoundError("Cart item", item_id)
        await self.repos.carts.delete(item.id)

    async def clear(self, user_id: int) -> int:
        removed = await self.repos.carts.clear(user_id)
        await self.repos.session.commit()
        return removed

    async def merge(self, user_id: int, items: List[CartItemCreate]) -> CartRead:
        """Fold guest cart lines into the user's cart.

        Lines that can no longer be ordered are skipped.
        """
        for data in items:
            try:
                line = await self.resolve(data)
            except (NotFoundError, BusinessRuleError) as e:
                logger.info(f"Skipping guest cart line for user {user_id}: {e.message}")
                continue
            await self._add_line(user_id, line)
        await self.repos.session.commit()
        return await self.get_cart(user_id)


def _same_customization(stored: Optional[Dict[str, Any]], incoming: Optional[Dict[str, Any]]) -> bool:
    """Compare customizations on what identifies the printed shirt, not on prices."""

    def key(value: Optional[Dict[str, Any]]):
        value = value or {}
        sides = []
        for side in ("front_design", "back_design"):
            placed = value.get(side) or {}
            sides.append((placed.get("design_id"), placed.get("design_image"), placed.get("position")))
        return tuple(sides), value.get("selected_product_id")

    return key(stored) == key(incoming)
