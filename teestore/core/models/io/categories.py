"""
Category I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Schema for creating a category or subcategory."""

    name: str = Field(min_length=1, max_length=32)
    parent_id: Optional[int] = Field(default=None, description="Parent category for subcategories")
    icon: Optional[str] = None
    is_active: bool = True


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=32)
    parent_id: Optional[int] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    parent_id: Optional[int] = None
    level: int
    icon: Optional[str] = None
    is_active: bool
    created_at: datetime


class CategoryTreeNode(CategoryRead):
    """A category with its active subcategories."""

    subcategories: List[CategoryRead] = Field(default_factory=list)
