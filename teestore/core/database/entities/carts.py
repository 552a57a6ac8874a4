"""
Cart entity models.

Each row is one line of a user's cart. Regular lines reference a product;
custom lines carry the studio customization (designs and their positions)
as JSON instead.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class CartItem(Base, table=True):
    """A single line of a shopping cart.

    Table: cart_items
    """

    __tablename__ = "cart_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    product_id: Optional[int] = Field(default=None, foreign_key="products.id")

    is_custom: bool = Field(default=False)
    # {front_design, back_design, selected_product_id}
    customization: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)

    name: str = Field(max_length=100)
    photo_url: Optional[str] = Field(default=None, max_length=1024)
    size: str = Field(max_length=8)
    color: Optional[str] = Field(default=None, max_length=32)
    price: int = Field(ge=0, description="Unit price at the time the item was added")
    quantity: int = Field(default=1, ge=1)

    added_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    def __repr__(self) -> str:
        return f"CartItem(id={self.id}, user_id={self.user_id}, name={self.name}, quantity={self.quantity})"
