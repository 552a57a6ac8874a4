"""
Reward points I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RewardBalance(BaseModel):
    points: int
    value: float = Field(description="Rupee value of the balance")
    max_points_per_order: int


class RewardTransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    amount: int
    balance: int
    description: str
    order_id: Optional[int] = None
    order_amount: Optional[float] = None
    created_at: datetime


class RewardAdjust(BaseModel):
    points: int = Field(description="Signed number of points to add or remove")
    reason: str = Field(min_length=1, max_length=200)
