"""
Product repository.

Data access for catalogue products: filtered and sorted listing, similar
product lookups and atomic per-size stock movements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import String, case, cast, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.products import Product, stock_column
from .base import BaseRepository, QueryBuilder

SORT_ORDERS = {
    "newest": (Product.created_at.desc(), Product.id.desc()),
    "price_asc": (Product.price.asc(), Product.id.asc()),
    "price_desc": (Product.price.desc(), Product.id.desc()),
    "popular": (Product.sold.desc(), Product.id.desc()),
    "rating": (Product.average_rating.desc(), Product.total_reviews.desc()),
}


@dataclass
class ProductFilters:
    """Criteria accepted by :meth:`ProductRepository.search`."""

    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    size: Optional[str] = None
    in_stock: Optional[bool] = None
    search: Optional[str] = None
    tag: Optional[str] = None


class ProductRepository(BaseRepository[Product]):
    """Repository for catalogue products."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Product)

    @staticmethod
    def _visible():
        return select(Product).where(Product.is_deleted == False, Product.is_active == True)  # noqa: E712

    async def get_available(self, product_id: int) -> Optional[Product]:
        """Get a product unless it has been soft-deleted."""
        product = await self.get_by_id(product_id)
        if product is None or product.is_deleted:
            return None
        return product

    async def list_by_ids(self, product_ids: Sequence[int]) -> List[Product]:
        if not product_ids:
            return []
        result = await self.session.execute(select(Product).where(Product.id.in_(list(product_ids))))
        return list(result.scalars().all())

    async def search(
        self,
        filters: ProductFilters,
        sort: str = "newest",
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[Product], int]:
        """List visible products matching the filters.

        Args:
            filters: Filtering criteria
            sort: One of the keys of ``SORT_ORDERS``
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            The requested page and the total number of matches
        """
        stmt = self._visible()

        if filters.category_id is not None:
            stmt = stmt.where(Product.category_id == filters.category_id)
        if filters.subcategory_id is not None:
            stmt = stmt.where(Product.subcategory_id == filters.subcategory_id)
        if filters.min_price is not None:
            stmt = stmt.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Product.price <= filters.max_price)
        if filters.size:
            stmt = stmt.where(getattr(Product, stock_column(filters.size)) > 0)
        if filters.in_stock:
            stmt = stmt.where(Product.total_stock > 0)
        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            stmt = stmt.where(
                or_(
                    Product.name.ilike(pattern),
                    Product.description.ilike(pattern),
                    cast(Product.tags, String).ilike(pattern),
                )
            )
        if filters.tag:
            stmt = stmt.where(cast(Product.tags, String).ilike(f'%"{filters.tag.strip().lower()}"%'))

        total_result = await self.session.execute(select(func.count()).select_from(stmt.subquery()))
        total = int(total_result.scalar_one())

        stmt = stmt.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"]))
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def list_in_stock(
        self,
        *,
        exclude_ids: Sequence[int],
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
        order_by_sold: bool = False,
        limit: int = 4,
    ) -> List[Product]:
        """Visible in-stock products, used to build "similar products" lists."""
        stmt = self._visible().where(Product.total_stock > 0)
        if exclude_ids:
            stmt = stmt.where(Product.id.not_in(list(exclude_ids)))
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if subcategory_id is not None:
            stmt = stmt.where(Product.subcategory_id == subcategory_id)
        if order_by_sold:
            stmt = stmt.order_by(Product.sold.desc(), Product.id.desc())
        else:
            stmt = stmt.order_by(Product.average_rating.desc(), Product.created_at.desc())
        result = await self.session.execute(stmt.limit(limit))
        return list(result.scalars().all())

    async def list_not_deleted(self) -> List[Product]:
        result = await self.session.execute(
            select(Product).where(Product.is_deleted == False).order_by(Product.name)  # noqa: E712
        )
        return list(result.scalars().all())

    async def count_in_category(self, category_id: int) -> int:
        """Count products (deleted ones included) that reference a category or subcategory."""
        stmt = (
            select(func.count())
            .select_from(Product)
            .where(or_(Product.category_id == category_id, Product.subcategory_id == category_id))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def decrement_stock(self, product_id: int, size: str, quantity: int) -> Optional[Product]:
        """Atomically take ``quantity`` units of one size out of stock.

        The update only applies when enough units are left, so concurrent
        orders cannot drive a size below zero. Nothing is committed.

        Returns:
            The refreshed product, or None if stock was insufficient
        """
        column = getattr(Product, stock_column(size))
        stmt = (
            update(Product)
            .where(Product.id == product_id, column >= quantity)
            .values(
                {
                    column: column - quantity,
                    Product.total_stock: Product.total_stock - quantity,
                    Product.sold: Product.sold + quantity,
                }
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.session.get(Product, product_id, populate_existing=True)

    async def increment_stock(self, product_id: int, size: str, quantity: int) -> None:
        """Put ``quantity`` units of one size back into stock (cancellations)."""
        column = getattr(Product, stock_column(size))
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(
                {
                    column: column + quantity,
                    Product.total_stock: Product.total_stock + quantity,
                    Product.sold: case((Product.sold >= quantity, Product.sold - quantity), else_=0),
                }
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
