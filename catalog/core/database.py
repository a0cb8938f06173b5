# DB connections

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from catalog.core.config import settings
from catalog.models.base import Base
from catalog.models.event import Event  # noqa: F401
from catalog.models.property import Property  # noqa: F401
from catalog.models.tracking_plan import TrackingPlan  # noqa: F401

engine_options = {"echo": settings.debug}
if not settings.database_url.startswith("sqlite"):
    engine_options.update(pool_size=20, max_overflow=0)

async_engine = create_async_engine(settings.database_url, **engine_options)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_db() -> AsyncSession:
    """Dependency for getting async database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(engine=async_engine) -> None:
    """Create the catalog schema directly, bypassing migrations (local dev only)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
