"""
Product I/O models.

Schemas for catalogue products, their listing pages, price breakdowns and
inventory reports. Stock is exchanged as a ``{size: quantity}`` mapping.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from teestore.core.models.domain.enums import Size

from .common import Pagination


class ProductImage(BaseModel):
    url: str
    caption: Optional[str] = None
    is_primary: bool = False
    order: int = 0


def _normalize_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    return [tag.strip().lower() for tag in tags if tag and tag.strip()]


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=2500)
    price: int = Field(ge=0)
    mrp: int = Field(default=0, ge=0, description="List price; the discount is derived from it")
    category_id: int
    subcategory_id: Optional[int] = None
    images: List[ProductImage] = Field(default_factory=list)
    stock: Dict[Size, int] = Field(default_factory=dict, description="Units in stock per size")
    available_sizes: List[Size] = Field(default_factory=lambda: list(Size))
    low_stock_threshold: int = Field(default=10, ge=0)
    tags: List[str] = Field(default_factory=list)
    is_active: bool = True

    @field_validator("stock")
    @classmethod
    def check_stock(cls, value: Dict[Size, int]) -> Dict[Size, int]:
        if any(quantity < 0 for quantity in value.values()):
            raise ValueError("Stock cannot be negative")
        return value

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: List[str]) -> List[str]:
        return _normalize_tags(value) or []


class ProductUpdate(BaseModel):
    """Schema for editing a product; unset fields stay unchanged."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2500)
    price: Optional[int] = Field(default=None, ge=0)
    mrp: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    images: Optional[List[ProductImage]] = None
    stock: Optional[Dict[Size, int]] = None
    available_sizes: Optional[List[Size]] = None
    low_stock_threshold: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _normalize_tags(value)


class ProductRead(BaseModel):
    """Schema for reading a product."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: int
    mrp: int
    discount: int
    discount_percentage: int
    category_id: int
    subcategory_id: Optional[int] = None
    images: List[ProductImage] = Field(default_factory=list)
    stock: Dict[str, int] = Field(default_factory=dict)
    available_sizes: List[str] = Field(default_factory=list)
    total_stock: int
    sold: int
    low_stock_threshold: int
    is_active: bool
    is_deleted: bool
    average_rating: float
    total_reviews: int
    tags: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product) -> "ProductRead":
        data = cls.model_validate(product, from_attributes=True)
        data.stock = product.size_stock()
        return data


class ProductPage(BaseModel):
    products: List[ProductRead]
    pagination: Pagination


class ProductPricing(BaseModel):
    """Price breakdown of a product as shown on its detail page."""

    price: int
    mrp: int
    gross_amount: int
    discount: int
    discount_percentage: int
    savings: int


class ImageAdd(BaseModel):
    url: str
    caption: Optional[str] = None
    is_primary: bool = False


class StockUpdate(BaseModel):
    size: Size
    quantity: int = Field(ge=0)


class InventoryCheck(BaseModel):
    """Whether a size can satisfy a requested quantity."""

    available: bool
    available_stock: int
    size: str
    product_name: str


class LowStockEntry(BaseModel):
    product_id: int
    product_name: str
    size: str
    stock: int
    threshold: int


class InventoryProductEntry(BaseModel):
    product_id: int
    product_name: str
    stock: Dict[str, int]
    total_stock: int
    sold: int
    value: int


class InventorySummary(BaseModel):
    total_products: int
    total_units: int
    total_value: int
    out_of_stock: int
    low_stock: int


class InventoryReport(BaseModel):
    summary: InventorySummary
    products: List[InventoryProductEntry]
