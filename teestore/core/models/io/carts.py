"""
Cart I/O models.

A cart line is either a catalogue product (``product_id``) or a custom
t-shirt described by a ``customization`` from the design studio. Prices are
always computed by the server.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from teestore.core.models.domain.enums import Size

FrontPosition = Literal["center", "left", "right", "center-bottom"]
BackPosition = Literal["center", "center-bottom"]


class FrontDesign(BaseModel):
    design_id: Optional[int] = None
    design_image: Optional[str] = None
    position: FrontPosition = "center"
    price: Optional[int] = Field(default=None, description="Filled in by the server")


class BackDesign(BaseModel):
    design_id: Optional[int] = None
    design_image: Optional[str] = None
    position: BackPosition = "center"
    price: Optional[int] = Field(default=None, description="Filled in by the server")


class Customization(BaseModel):
    """Studio output for a custom t-shirt."""

    front_design: Optional[FrontDesign] = None
    back_design: Optional[BackDesign] = None
    selected_product_id: Optional[int] = Field(
        default=None, description="Catalogue product used as the blank, its price replaces the base price"
    )

    @model_validator(mode="after")
    def check_has_design(self) -> "Customization":
        if self.front_design is None and self.back_design is None:
            raise ValueError("A custom item needs a front or back design")
        return self


class CartItemCreate(BaseModel):
    """Schema for adding a line to the cart."""

    product_id: Optional[int] = None
    customization: Optional[Customization] = None
    name: Optional[str] = Field(default=None, max_length=100)
    photo_url: Optional[str] = None
    size: Size
    color: Optional[str] = Field(default=None, max_length=32)
    quantity: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_product_or_customization(self) -> "CartItemCreate":
        if self.product_id is None and self.customization is None:
            raise ValueError("Either product_id or customization is required")
        return self


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=0, description="New quantity, 0 removes the line")


class CartItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: Optional[int] = None
    is_custom: bool
    customization: Optional[dict] = None
    name: str
    photo_url: Optional[str] = None
    size: str
    color: Optional[str] = None
    price: int
    quantity: int
    added_at: datetime


class CartRead(BaseModel):
    items: List[CartItemRead]
    total: int
    item_count: int


class CartMerge(BaseModel):
    """Guest cart lines to merge into the signed-in user's cart."""

    items: List[CartItemCreate] = Field(default_factory=list)
