"""Shared fixtures for unit tests.

Repositories and services run against an in-memory SQLite database created
from the entity metadata.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from slumbering_ancients.core.database import entities  # noqa: F401
from slumbering_ancients.core.database.base import Base
from slumbering_ancients.core.database.entities import Map


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    session_maker = async_sessionmaker(bind=in_memory_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_map():
    """Factory for unsaved map rows."""

    def _make(**overrides) -> Map:
        values = {
            "name": "Ashen Peaks",
            "image_url": "http://mock-storage/maps/ashen-peaks.png",
            "image_path": "maps/ashen-peaks.png",
            "width": 2000,
            "height": 1000,
        }
        values.update(overrides)
        return Map(**values)

    return _make
