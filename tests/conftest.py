import os
from datetime import datetime, timedelta
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# Ensure critical settings exist before the app/config modules import.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("STORAGE_BACKEND", "database")

from app.models import Drop
from app.services.position_service import PositionEngine
from app.storage import DatabaseStorage, MemoryStorage, QueueStorage
from core.db import get_db, utcnow
from core.db.base import Base
from main import app

# Use SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def setup_db():
    """Create and drop all tables for each test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for testing."""
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing."""

    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """A fresh in-memory store per test."""
    return MemoryStorage()


@pytest.fixture(params=["memory", "database"])
def storage(request, db_session: AsyncSession) -> QueueStorage:
    """Run a store test against both backends."""
    if request.param == "memory":
        return MemoryStorage()
    return DatabaseStorage(db_session)


@pytest.fixture
def position_engine(memory_storage: MemoryStorage) -> PositionEngine:
    return PositionEngine(memory_storage)


@pytest.fixture
def create_drop(storage: QueueStorage):
    """Factory fixture to schedule drops relative to now."""

    async def _create_drop(
        name: str = "Test Drop",
        minutes_ahead: int = 120,
        is_active: bool = True,
        drop_time: Optional[datetime] = None,
    ) -> Drop:
        return await storage.create_drop(
            name=name,
            drop_time=drop_time or utcnow() + timedelta(minutes=minutes_ahead),
            is_active=is_active,
        )

    return _create_drop
