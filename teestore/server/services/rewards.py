"""
Reward points service.
"""

from __future__ import annotations

from typing import List, Optional

from teestore.core.database.entities.rewards import RewardTransaction
from teestore.core.database.entities.users import User
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import BusinessRuleError, NotFoundError
from teestore.core.logging_config import get_logger
from teestore.core.models.domain.enums import RewardTransactionType
from teestore.core.models.io.rewards import RewardBalance
from teestore.server.core.config import PricingConfig

logger = get_logger(__name__)


class RewardService:
    def __init__(self, repos: RepoBundle, pricing: PricingConfig) -> None:
        self.repos = repos
        self.pricing = pricing

    def balance(self, user: User) -> RewardBalance:
        return RewardBalance(
            points=user.reward_points,
            value=user.reward_points * self.pricing.reward_point_value,
            max_points_per_order=self.pricing.max_reward_points_per_order,
        )

    async def history(self, user_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[RewardTransaction]:
        return await self.repos.rewards.list_for_user(user_id, limit=limit, offset=offset)

    async def adjust(self, user_id: int, points: int, reason: str, admin_id: int) -> RewardTransaction:
        """Add or remove points by hand; the balance may not go negative."""
        if await self.repos.users.get_by_id(user_id) is None:
            raise NotFoundError("User", user_id)
        if points == 0:
            raise BusinessRuleError("Adjustment must change the balance")

        user = await self.repos.users.add_reward_points(user_id, points)
        if user is None:
            balance = await self.repos.users.get_reward_points(user_id)
            raise BusinessRuleError(f"Insufficient points: balance is {balance}")

        transaction = await self.repos.rewards.add(
            RewardTransaction(
                user_id=user.id,
                type=RewardTransactionType.admin_adjustment.value,
                amount=points,
                balance=user.reward_points,
                description=reason,
                admin_user_id=admin_id,
            )
        )
        await self.repos.session.commit()
        await self.repos.session.refresh(transaction)
        logger.info(f"Admin {admin_id} adjusted user {user.id} reward points by {points} to {user.reward_points}")
        return transaction
