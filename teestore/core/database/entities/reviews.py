"""
Review entity models.

A user reviews a product at most once. ``helpful_user_ids`` holds the ids of
users who marked the review helpful.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Review(Base, table=True):
    """Product review.

    Table: reviews
    """

    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("product_id", "user_id", name="uq_reviews_product_user"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    rating: int = Field(ge=1, le=5)
    title: str = Field(max_length=100)
    comment: str = Field(max_length=1000)
    images: List[str] = Field(default_factory=list, sa_type=JSON)

    helpful_user_ids: List[int] = Field(default_factory=list, sa_type=JSON)
    verified: bool = Field(default=False, description="Reviewer bought the product")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def helpful_count(self) -> int:
        return len(self.helpful_user_ids or [])
