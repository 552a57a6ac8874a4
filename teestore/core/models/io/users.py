"""
User I/O models.

Schemas for the account profile and saved shipping addresses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .auth import normalize_email


class AddressBase(BaseModel):
    full_name: str = Field(max_length=100)
    email: Optional[str] = None
    phone: str = Field(max_length=20)
    address: str
    city: str = Field(max_length=64)
    state: str = Field(max_length=64)
    country: str = Field(default="India", max_length=64)
    pin_code: str = Field(max_length=10)


class AddressCreate(AddressBase):
    """Schema for saving a new shipping address."""

    is_default: bool = False


class AddressUpdate(BaseModel):
    """Schema for editing a saved address; unset fields stay unchanged."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    pin_code: Optional[str] = None
    is_default: Optional[bool] = None


class AddressRead(AddressBase):
    id: str
    is_default: bool = False
    created_at: Optional[datetime] = None


class UserRead(BaseModel):
    """Schema for reading an account, never exposes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    lastname: Optional[str] = None
    email: str
    userinfo: Optional[str] = None
    role: int
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    pincode: Optional[str] = None
    addresses: List[AddressRead] = Field(default_factory=list)
    reward_points: int = 0
    is_active: bool = True
    created_at: datetime


class UserUpdate(BaseModel):
    """Schema for editing the caller's profile."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=32)
    lastname: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = None
    userinfo: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    pincode: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        return normalize_email(value) if value is not None else value


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)
