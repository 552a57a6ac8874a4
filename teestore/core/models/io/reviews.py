"""
Review I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=1, max_length=100)
    comment: str = Field(min_length=1, max_length=1000)
    images: List[str] = Field(default_factory=list)


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    comment: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    images: Optional[List[str]] = None


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    user_id: int
    user_name: Optional[str] = None
    rating: int
    title: str
    comment: str
    images: List[str] = Field(default_factory=list)
    verified: bool
    helpful_count: int = 0
    is_helpful: bool = False
    created_at: datetime
    updated_at: datetime


class ReviewStats(BaseModel):
    average_rating: float
    total_reviews: int
    distribution: Dict[int, int]


class ReviewPage(BaseModel):
    reviews: List[ReviewRead]
    current_page: int
    total_pages: int
    total_reviews: int
    stats: ReviewStats


class HelpfulToggle(BaseModel):
    helpful_count: int
    is_helpful: bool
