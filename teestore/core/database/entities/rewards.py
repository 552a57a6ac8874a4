"""
Reward transaction entity models.

Ledger of reward point movements. ``amount`` is signed (negative for
redemptions) and ``balance`` is the user's balance after the movement.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class RewardTransaction(Base, table=True):
    """One movement in a user's reward points ledger.

    Table: reward_transactions
    """

    __tablename__ = "reward_transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    type: str = Field(max_length=32, description="earned | redeemed | admin_adjustment | expired")
    amount: int
    balance: int
    description: str = Field(max_length=255)
    order_id: Optional[int] = Field(default=None, foreign_key="orders.id")
    admin_user_id: Optional[int] = Field(default=None)
    order_amount: Optional[float] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
