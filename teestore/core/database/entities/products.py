"""
Product entity models.

Stock is kept per size in dedicated integer columns so that an order can
decrement one size with a single conditional ``UPDATE``. ``total_stock`` and
the discount fields are derived values refreshed by :meth:`Product.refresh_derived`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from teestore.core.models.domain.enums import Size

from ..base import Base, utc_now

ALL_SIZES: List[str] = [size.value for size in Size]


def stock_column(size: str) -> str:
    """Name of the stock column holding ``size``."""
    return f"stock_{Size(size).value.lower()}"


class Product(Base, table=True):
    """Catalogue product (a ready-made t-shirt).

    Table: products
    """

    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, index=True)
    description: str = Field(default="", max_length=2500)

    # Pricing
    price: int = Field(ge=0)
    mrp: int = Field(default=0, ge=0)
    discount: int = Field(default=0)
    discount_percentage: int = Field(default=0)

    category_id: int = Field(foreign_key="categories.id", index=True)
    subcategory_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)

    # [{url, caption, is_primary, order}]
    images: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)

    # Inventory
    stock_s: int = Field(default=0, ge=0)
    stock_m: int = Field(default=0, ge=0)
    stock_l: int = Field(default=0, ge=0)
    stock_xl: int = Field(default=0, ge=0)
    stock_xxl: int = Field(default=0, ge=0)
    available_sizes: List[str] = Field(default_factory=lambda: list(ALL_SIZES), sa_type=JSON)
    total_stock: int = Field(default=0)
    sold: int = Field(default=0)
    low_stock_threshold: int = Field(default=10)

    # Lifecycle
    is_active: bool = Field(default=True)
    is_deleted: bool = Field(default=False, index=True)
    deleted_at: Optional[datetime] = Field(default=None)
    deleted_by: Optional[int] = Field(default=None)

    # Ratings, maintained from reviews
    average_rating: float = Field(default=0.0)
    total_reviews: int = Field(default=0)

    tags: List[str] = Field(default_factory=list, sa_type=JSON)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def stock_for(self, size: str) -> int:
        return getattr(self, stock_column(size))

    def set_stock(self, size: str, quantity: int) -> None:
        setattr(self, stock_column(size), quantity)

    def size_stock(self) -> Dict[str, int]:
        """Stock level of every size, keyed by size label."""
        return {size: self.stock_for(size) for size in ALL_SIZES}

    def offers_size(self, size: str) -> bool:
        return size in (self.available_sizes or [])

    def refresh_derived(self) -> None:
        """Recompute ``total_stock`` and the discount fields from their sources."""
        self.total_stock = sum(self.stock_for(size) for size in self.available_sizes or [] if size in ALL_SIZES)
        if self.mrp > 0 and self.price > 0:
            self.discount = self.mrp - self.price
            self.discount_percentage = round(self.discount / self.mrp * 100)
        else:
            self.discount = 0
            self.discount_percentage = 0

    def __repr__(self) -> str:
        return f"Product(id={self.id}, name={self.name}, price={self.price})"
