"""
Category entity models.

Categories form a shallow tree: main categories have no parent (level 0)
and subcategories point at their parent with ``level = parent.level + 1``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class Category(Base, table=True):
    """Product and design category.

    Table: categories
    """

    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=32, unique=True)
    slug: str = Field(max_length=64, unique=True, index=True)
    parent_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    level: int = Field(default=0)
    icon: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Category(id={self.id}, slug={self.slug}, level={self.level})"
