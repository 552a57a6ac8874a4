"""
Design I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from teestore.core.models.domain.enums import DesignPlacement

from .common import Pagination


class DesignCreate(BaseModel):
    """Schema for uploading a design."""

    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    image_url: str
    category_id: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    price: int = Field(default=0, ge=0, description="Surcharge on custom t-shirts, 0 uses the default fee")
    is_active: bool = True
    is_featured: bool = False
    placements: List[DesignPlacement] = Field(default_factory=lambda: [DesignPlacement.front])
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    artist_name: Optional[str] = Field(default=None, max_length=100)
    artist_link: Optional[str] = None
    print_file_url: Optional[str] = None
    print_file_format: Optional[str] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: List[str]) -> List[str]:
        return [tag.strip().lower() for tag in value if tag and tag.strip()]


class DesignUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    tags: Optional[List[str]] = None
    price: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    placements: Optional[List[DesignPlacement]] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    artist_name: Optional[str] = None
    artist_link: Optional[str] = None
    print_file_url: Optional[str] = None
    print_file_format: Optional[str] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        return [tag.strip().lower() for tag in value if tag and tag.strip()]


class DesignRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    slug: str
    image_url: str
    category_id: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    price: int
    views: int
    likes: int
    used: int
    is_active: bool
    is_featured: bool
    placements: List[str] = Field(default_factory=list)
    width: Optional[int] = None
    height: Optional[int] = None
    aspect_ratio: Optional[float] = None
    artist_name: Optional[str] = None
    artist_link: Optional[str] = None
    print_file_url: Optional[str] = None
    print_file_format: Optional[str] = None
    created_at: datetime


class DesignPage(BaseModel):
    designs: List[DesignRead]
    pagination: Pagination


class LikeRequest(BaseModel):
    like: bool = Field(default=True, description="True to like, False to remove a like")
