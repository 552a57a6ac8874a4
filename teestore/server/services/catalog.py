"""
Catalogue service.

Category tree maintenance and product management: slugs, derived price and
stock fields, soft deletion and "similar products" recommendations.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from teestore.core.database.base import utc_now
from teestore.core.database.entities.categories import Category
from teestore.core.database.entities.products import Product
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import BusinessRuleError, ConflictError, NotFoundError
from teestore.core.logging_config import get_logger
from teestore.core.models.io.categories import CategoryCreate, CategoryRead, CategoryTreeNode, CategoryUpdate
from teestore.core.models.io.products import (
    ImageAdd,
    ProductCreate,
    ProductPricing,
    ProductUpdate,
)

logger = get_logger(__name__)


def slugify_category(name: str) -> str:
    """Category slug: lower-case, punctuation dropped, whitespace runs turned into ``-``."""
    slug = re.sub(r"[^\w\s-]", "", name.strip().lower())
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"-+", "-", slug).strip("-")


class CatalogService:
    """Category and product workflows."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def get_category(self, category_id: int) -> Category:
        category = await self.repos.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def _level_for_parent(self, parent_id: Optional[int]) -> int:
        if parent_id is None:
            return 0
        parent = await self.repos.categories.get_by_id(parent_id)
        if parent is None:
            raise NotFoundError("Parent category", parent_id)
        return parent.level + 1

    async def _check_unique(self, name: str, slug: str, ignore_id: Optional[int] = None) -> None:
        existing = await self.repos.categories.get_by_name(name)
        if existing is not None and existing.id != ignore_id:
            raise ConflictError(f"Category '{name}' already exists")
        existing = await self.repos.categories.get_by_slug(slug)
        if existing is not None and existing.id != ignore_id:
            raise ConflictError(f"Category slug '{slug}' already exists")

    async def create_category(self, data: CategoryCreate) -> Category:
        name = data.name.strip()
        slug = slugify_category(name)
        if not slug:
            raise BusinessRuleError("Category name must contain letters or digits")
        await self._check_unique(name, slug)
        level = await self._level_for_parent(data.parent_id)

        category = Category(
            name=name,
            slug=slug,
            parent_id=data.parent_id,
            level=level,
            icon=data.icon,
            is_active=data.is_active,
        )
        category = await self.repos.categories.create(category)
        logger.info(f"Category created: {category.slug} (level {category.level})")
        return category

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        category = await self.get_category(category_id)
        update = data.model_dump(exclude_unset=True)

        if "name" in update and update["name"] is not None:
            name = update["name"].strip()
            slug = slugify_category(name)
            await self._check_unique(name, slug, ignore_id=category.id)
            category.name = name
            category.slug = slug

        if "parent_id" in update:
            parent_id = update["parent_id"]
            if parent_id == category.id:
                raise BusinessRuleError("A category cannot be its own parent")
            category.level = await self._level_for_parent(parent_id)
            category.parent_id = parent_id

        for key in ("icon", "is_active"):
            if key in update and update[key] is not None:
                setattr(category, key, update[key])

        return await self.repos.categories.update(category)

    async def delete_category(self, category_id: int) -> None:
        """Delete a category that has no subcategories and no products."""
        category = await self.get_category(category_id)
        if await self.repos.categories.count_children(category.id) > 0:
            raise BusinessRuleError("Cannot delete a category that has subcategories")
        if await self.repos.products.count_in_category(category.id) > 0:
            raise BusinessRuleError("Cannot delete a category that still has products")
        await self.repos.categories.delete(category.id)
        logger.info(f"Category deleted: {category.slug}")

    async def category_tree(self) -> List[CategoryTreeNode]:
        tree = []
        for main in await self.repos.categories.list_main():
            children = await self.repos.categories.list_children(main.id)
            node = CategoryTreeNode.model_validate(main, from_attributes=True)
            node.subcategories = [CategoryRead.model_validate(child) for child in children]
            tree.append(node)
        return tree

    async def category_hierarchy(self, category_id: int) -> CategoryTreeNode:
        category = await self.get_category(category_id)
        node = CategoryTreeNode.model_validate(category, from_attributes=True)
        node.subcategories = [
            CategoryRead.model_validate(child) for child in await self.repos.categories.list_children(category.id)
        ]
        return node

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def get_product(self, product_id: int) -> Product:
        product = await self.repos.products.get_available(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def _check_categories(self, category_id: int, subcategory_id: Optional[int]) -> None:
        await self.get_category(category_id)
        if subcategory_id is not None:
            subcategory = await self.get_category(subcategory_id)
            if subcategory.parent_id != category_id:
                raise BusinessRuleError("Subcategory does not belong to the selected category")

    @staticmethod
    def _apply_stock(product: Product, stock: Dict) -> None:
        for size, quantity in stock.items():
            product.set_stock(getattr(size, "value", size), quantity)

    async def create_product(self, data: ProductCreate) -> Product:
        await self._check_categories(data.category_id, data.subcategory_id)

        product = Product(
            name=data.name.strip(),
            description=data.description,
            price=data.price,
            mrp=data.mrp,
            category_id=data.category_id,
            subcategory_id=data.subcategory_id,
            images=[image.model_dump() for image in data.images],
            available_sizes=[size.value for size in data.available_sizes],
            low_stock_threshold=data.low_stock_threshold,
            tags=data.tags,
            is_active=data.is_active,
        )
        self._apply_stock(product, data.stock)
        product.refresh_derived()

        product = await self.repos.products.create(product)
        logger.info(f"Product created: {product.id} {product.name} (stock {product.total_stock})")
        return product

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = await self.get_product(product_id)
        update = data.model_dump(exclude_unset=True)

        category_id = update.get("category_id") or product.category_id
        subcategory_id = update["subcategory_id"] if "subcategory_id" in update else product.subcategory_id
        if "category_id" in update or "subcategory_id" in update:
            await self._check_categories(category_id, subcategory_id)

        if data.images is not None:
            product.images = [image.model_dump() for image in data.images]
        if data.available_sizes is not None:
            product.available_sizes = [size.value for size in data.available_sizes]
        if data.stock is not None:
            self._apply_stock(product, data.stock)

        for key, value in update.items():
            if key in ("images", "available_sizes", "stock"):
                continue
            if value is None and key != "subcategory_id":
                continue
            setattr(product, key, value)

        product.refresh_derived()
        return await self.repos.products.update(product)

    async def soft_delete_product(self, product_id: int, deleted_by: Optional[int]) -> Product:
        product = await self.get_product(product_id)
        product.is_deleted = True
        product.deleted_at = utc_now()
        product.deleted_by = deleted_by
        logger.info(f"Product {product.id} soft-deleted by user {deleted_by}")
        return await self.repos.products.update(product)

    async def restore_product(self, product_id: int) -> Product:
        product = await self.repos.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        if not product.is_deleted:
            raise BusinessRuleError("Product is not deleted")
        product.is_deleted = False
        product.deleted_at = None
        product.deleted_by = None
        return await self.repos.products.update(product)

    async def add_image(self, product_id: int, image: ImageAdd) -> Product:
        product = await self.get_product(product_id)
        images = [dict(existing) for existing in product.images or []]
        if image.is_primary or not images:
            for existing in images:
                existing["is_primary"] = False
        images.append(
            {
                "url": image.url,
                "caption": image.caption,
                "is_primary": image.is_primary or not images,
                "order": len(images),
            }
        )
        product.images = images
        return await self.repos.products.update(product)

    async def remove_image(self, product_id: int, index: int) -> Product:
        product = await self.get_product(product_id)
        images = [dict(existing) for existing in product.images or []]
        if index < 0 or index >= len(images):
            raise NotFoundError("Product image", index)
        removed = images.pop(index)
        for position, existing in enumerate(images):
            existing["order"] = position
        if removed.get("is_primary") and images:
            images[0]["is_primary"] = True
        product.images = images
        return await self.repos.products.update(product)

    async def similar_products(self, product_id: int, limit: int = 4) -> List[Product]:
        """Recommend in-stock products close to the given one.

        Candidates come from the same category first, then the same
        subcategory, then the best sellers, without duplicates and never the
        product itself.
        """
        product = await self.get_product(product_id)
        picked: List[Product] = []

        async def take(**criteria) -> None:
            if len(picked) >= limit:
                return
            exclude = [product.id] + [p.id for p in picked]
            picked.extend(
                await self.repos.products.list_in_stock(exclude_ids=exclude, limit=limit - len(picked), **criteria)
            )

        await take(category_id=product.category_id)
        if product.subcategory_id is not None:
            await take(subcategory_id=product.subcategory_id)
        await take(order_by_sold=True)
        return picked

    @staticmethod
    def pricing(product: Product) -> ProductPricing:
        """Price breakdown; without an MRP the gross amount is price × 1.5."""
        gross = product.mrp if product.mrp > 0 else round(product.price * 1.5)
        savings = max(gross - product.price, 0)
        percentage = round(savings / gross * 100) if gross > 0 else 0
        return ProductPricing(
            price=product.price,
            mrp=product.mrp,
            gross_amount=gross,
            discount=savings,
            discount_percentage=percentage,
            savings=savings,
        )
