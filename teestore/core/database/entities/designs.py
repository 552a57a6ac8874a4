"""
Design entity models.

Designs are the artwork customers place on custom t-shirts in the mockup
studio. ``used`` counts how many ordered items carried the design.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Design(Base, table=True):
    """Printable artwork offered in the design studio.

    Table: designs
    """

    __tablename__ = "designs"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    slug: str = Field(max_length=128, unique=True, index=True)
    image_url: str = Field(max_length=1024)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    tags: List[str] = Field(default_factory=list, sa_type=JSON)

    # Surcharge added to a custom t-shirt, 0 means the default design fee
    price: int = Field(default=0, ge=0)

    # Engagement counters
    views: int = Field(default=0)
    likes: int = Field(default=0)
    used: int = Field(default=0)

    is_active: bool = Field(default=True)
    is_featured: bool = Field(default=False)

    placements: List[str] = Field(default_factory=lambda: ["front"], sa_type=JSON)
    width: Optional[int] = Field(default=None)
    height: Optional[int] = Field(default=None)
    aspect_ratio: Optional[float] = Field(default=None)

    artist_name: Optional[str] = Field(default=None, max_length=100)
    artist_link: Optional[str] = Field(default=None, max_length=1024)
    print_file_url: Optional[str] = Field(default=None, max_length=1024)
    print_file_format: Optional[str] = Field(default=None, max_length=16)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def refresh_aspect_ratio(self) -> None:
        if self.width and self.height:
            self.aspect_ratio = self.width / self.height
        else:
            self.aspect_ratio = None

    def __repr__(self) -> str:
        return f"Design(id={self.id}, slug={self.slug})"
