"""
Wishlist I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from teestore.core.models.domain.enums import Size

from .products import ProductRead


class WishlistAdd(BaseModel):
    product_id: int


class WishlistEntry(BaseModel):
    product: ProductRead
    added_at: datetime


class WishlistRead(BaseModel):
    items: List[WishlistEntry]
    count: int


class WishlistContains(BaseModel):
    in_wishlist: bool


class WishlistCount(BaseModel):
    count: int


class MoveToCart(BaseModel):
    size: Size
    color: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
