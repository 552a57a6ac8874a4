"""
User entity models.

This module contains the database entity for storefront accounts, both
customers and administrators. Saved shipping addresses are kept inline as a
JSON list, and the reward points balance is denormalised onto the account.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class User(Base, table=True):
    """Persistent storefront account.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Identity
    name: str = Field(max_length=32)
    lastname: Optional[str] = Field(default=None, max_length=32)
    email: str = Field(max_length=255, unique=True, index=True)
    userinfo: Optional[str] = Field(default=None)
    password_hash: str = Field(max_length=255)
    role: int = Field(default=0, description="0 = customer, 1 = admin")

    # Contact and primary address
    phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None, max_length=64)
    state: Optional[str] = Field(default=None, max_length=64)
    country: Optional[str] = Field(default="India", max_length=64)
    pincode: Optional[str] = Field(default=None, max_length=10)

    # Saved shipping addresses, each {id, full_name, ..., is_default}
    addresses: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)

    reward_points: int = Field(default=0)

    # Soft delete
    is_active: bool = Field(default=True)
    deleted_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_admin(self) -> bool:
        return self.role == 1

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
