"""Schemas shared by several resources."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Page metadata returned with paginated listings."""

    current_page: int
    total_pages: int
    total: int
    has_more: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(current_page=page, total_pages=total_pages, total=total, has_more=page < total_pages)


class Message(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(description="Human-readable outcome")
