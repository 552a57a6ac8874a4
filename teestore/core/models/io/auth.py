"""
Authentication I/O models.

Request and response schemas for account signup and token issuance.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email")
    return value


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    name: str = Field(min_length=1, max_length=32)
    lastname: Optional[str] = Field(default=None, max_length=32)
    email: str = Field(description="Unique login e-mail")
    password: str = Field(min_length=6, description="Password, at least 6 characters")

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return normalize_email(value)


class SignupResponse(BaseModel):
    id: int
    name: str
    email: str


class SigninRequest(BaseModel):
    """Schema for exchanging credentials for a token."""

    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class SignedInUser(BaseModel):
    id: int
    name: str
    email: str
    role: int


class TokenResponse(BaseModel):
    """Issued access token."""

    token: str = Field(description="Bearer token to send in the Authorization header")
    expiry_time: int = Field(description="Expiry as milliseconds since the epoch")
    user: SignedInUser
