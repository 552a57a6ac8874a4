"""Reward transaction repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.rewards import RewardTransaction
from .base import BaseRepository, QueryBuilder


class RewardTransactionRepository(BaseRepository[RewardTransaction]):
    """Repository for the reward points ledger."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RewardTransaction)

    async def list_for_user(
        self, user_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[RewardTransaction]:
        """Get a user's ledger entries, newest first."""
        stmt = (
            select(RewardTransaction)
            .where(RewardTransaction.user_id == user_id)
            .order_by(RewardTransaction.created_at.desc(), RewardTransaction.id.desc())
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_order(self, order_id: int) -> List[RewardTransaction]:
        stmt = select(RewardTransaction).where(RewardTransaction.order_id == order_id).order_by(RewardTransaction.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
