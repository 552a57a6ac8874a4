"""
Store setting entity models.

Key/value configuration editable at runtime by administrators, such as the
reviews toggle and the quantity discount, free shipping and loyalty tiers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class StoreSetting(Base, table=True):
    """Runtime store setting.

    Table: settings
    """

    __tablename__ = "settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(max_length=64, unique=True, index=True)
    value: Any = Field(default=None, sa_type=JSON)
    description: Optional[str] = Field(default=None, max_length=255)
    category: str = Field(default="general", max_length=32)
    updated_by: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"StoreSetting(key={self.key})"
