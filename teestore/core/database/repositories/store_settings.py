"""
Store setting repository.

Key/value access to runtime settings stored as JSON.
"""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.store_settings import StoreSetting
from .base import BaseRepository


class StoreSettingRepository(BaseRepository[StoreSetting]):
    """Repository for runtime store settings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, StoreSetting)

    async def get_by_key(self, key: str) -> Optional[StoreSetting]:
        result = await self.session.execute(select(StoreSetting).where(StoreSetting.key == key))
        return result.scalar_one_or_none()

    async def get_value(self, key: str, default: Any = None) -> Any:
        """Get the value of a setting, or ``default`` when it is not stored."""
        setting = await self.get_by_key(key)
        if setting is None:
            return default
        return setting.value

    async def list_all(self) -> List[StoreSetting]:
        result = await self.session.execute(select(StoreSetting).order_by(StoreSetting.category, StoreSetting.key))
        return list(result.scalars().all())

    async def set_value(
        self,
        key: str,
        value: Any,
        description: Optional[str] = None,
        category: Optional[str] = None,
        updated_by: Optional[int] = None,
    ) -> StoreSetting:
        """Create or replace a setting and commit.

        The value is always reassigned as a whole so JSON change tracking
        picks it up.
        """
        setting = await self.get_by_key(key)
        if setting is None:
            setting = StoreSetting(key=key, value=value, description=description, category=category or "general")
        else:
            setting.value = value
            if description is not None:
                setting.description = description
            if category is not None:
                setting.category = category
            setting.updated_at = utc_now()
        setting.updated_by = updated_by
        self.session.add(setting)
        await self.session.commit()
        await self.session.refresh(setting)
        return setting
