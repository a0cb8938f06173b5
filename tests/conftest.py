"""
Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite) with the
catalog schema created from the ORM models.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.core.database import Base, get_db
from catalog.main import app
from catalog.repositories.event_store import EventStore
from catalog.repositories.property_store import PropertyStore
from catalog.repositories.tracking_plan_store import TrackingPlanStore


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def property_store(db):
    return PropertyStore(db)


@pytest.fixture
def event_store(db):
    return EventStore(db)


@pytest.fixture
def plan_store(db):
    return TrackingPlanStore(db)


@pytest.fixture
async def client(db):
    """Async test client bound to the per-test database"""

    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
