"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns used across all
repository implementations in the centralized database layer. Built with
async SQLAlchemy and SQLModel entities.

``create``/``update``/``delete`` commit immediately and suit single-entity
endpoints. ``add`` only flushes, so services can compose several writes into
one transaction and commit (or roll back) once.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class BaseRepository(Generic[EntityType]):
    """Base async repository with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLAlchemy session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def add(self, entity: EntityType) -> EntityType:
        """Stage an entity in the current transaction and flush it.

        Generated fields (ids) are available afterwards, nothing is committed.
        """
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType) -> EntityType:
        """Update an existing entity record.

        Args:
            entity: SQLModel instance with updated fields

        Returns:
            Updated entity instance
        """
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: int) -> bool:
        """Delete entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            True if deleted, False if not found
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional pagination and equality filtering.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Dictionary of field filters

        Returns:
            List of entity instances
        """
        stmt = select(self.model).order_by(self.model.id)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count entities matching equality filters."""
        stmt = select(func.count()).select_from(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply filters to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt

    @staticmethod
    def page_offset(page: int, limit: int) -> int:
        """Offset of a 1-based page."""
        return max(page - 1, 0) * limit
