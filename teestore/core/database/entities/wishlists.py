"""Wishlist entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class WishlistItem(Base, table=True):
    """A product saved to a user's wishlist.

    Table: wishlist_items
    """

    __tablename__ = "wishlist_items"
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_wishlist_user_product"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    product_id: int = Field(foreign_key="products.id")
    added_at: datetime = Field(default_factory=utc_now)
