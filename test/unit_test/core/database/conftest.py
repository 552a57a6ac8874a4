"""Test configuration for database unit tests.

This module provides common fixtures for testing the centralized database
layer against an in-memory SQLite database.
"""

from __future__ import annotations

from datetime import timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from teestore.core.database.base import utc_now
from teestore.core.database.entities.categories import Category
from teestore.core.database.entities.users import User
from teestore.core.database.utils import create_all


@pytest_asyncio.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine with every table."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async_session = async_sessionmaker(in_memory_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def stored_user(in_memory_session) -> User:
    user = User(name="Asha", email="asha@example.com", password_hash="x")
    in_memory_session.add(user)
    await in_memory_session.commit()
    return user


@pytest_asyncio.fixture
async def stored_category(in_memory_session) -> Category:
    category = Category(name="Men", slug="men")
    in_memory_session.add(category)
    await in_memory_session.commit()
    return category


@pytest.fixture(scope="function")
def sample_product_data() -> dict:
    """Sample product data for testing."""
    return {
        "name": "Classic Tee",
        "description": "Heavyweight cotton crew neck",
        "price": 500,
        "mrp": 800,
        "stock_s": 2,
        "stock_m": 5,
        "stock_l": 0,
        "stock_xl": 3,
        "stock_xxl": 1,
        "tags": ["basics", "cotton"],
    }


@pytest.fixture(scope="function")
def sample_coupon_data() -> dict:
    """Sample coupon data for testing."""
    now = utc_now()
    return {
        "code": "SAVE10",
        "discount_type": "percentage",
        "discount_value": 10,
        "valid_from": now - timedelta(days=1),
        "valid_until": now + timedelta(days=30),
        "display_type": "promotional",
    }
