"""
User repository.

Data access for storefront accounts, including lookups by e-mail.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by e-mail address (case-insensitive).

        Args:
            email: Address to look up

        Returns:
            User instance or None
        """
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active(self, user_id: int) -> Optional[User]:
        """Get a user that has not been soft-deleted."""
        user = await self.get_by_id(user_id)
        if user is None or not user.is_active:
            return None
        return user

    async def add_reward_points(self, user_id: int, points: int) -> Optional[User]:
        """Move a reward balance by ``points`` in a single ``UPDATE``.

        A negative ``points`` only applies while the balance can cover it, so
        concurrent orders cannot spend the same points twice. Nothing is
        committed.

        Returns:
            The user reloaded with the new balance, or None if the balance was
            too low (or the user does not exist)
        """
        stmt = update(User).where(User.id == user_id)
        if points < 0:
            stmt = stmt.where(User.reward_points >= -points)
        stmt = stmt.values({User.reward_points: User.reward_points + points}).execution_options(
            synchronize_session=False
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.session.get(User, user_id, populate_existing=True)

    async def get_reward_points(self, user_id: int) -> int:
        """Current stored balance, bypassing the identity map."""
        result = await self.session.execute(select(User.reward_points).where(User.id == user_id))
        return int(result.scalar_one_or_none() or 0)
