"""
Store setting I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class SettingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: Any = None
    description: Optional[str] = None
    category: str
    updated_by: Optional[int] = None
    updated_at: datetime


class SettingWrite(BaseModel):
    value: Any
    description: Optional[str] = None
    category: Optional[str] = None


class ReviewsStatus(BaseModel):
    reviews_enabled: bool
