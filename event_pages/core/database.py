# DB connections

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from event_pages.core.config import settings
from event_pages.models.event import Base

# Process-wide handles, created on first use and reused across requests
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return the shared async engine, creating it on first call"""
    global _engine, _session_factory

    if _engine is None:
        engine_kwargs = {"echo": settings.debug}
        if not settings.database_url.startswith("sqlite"):
            engine_kwargs.update(pool_size=20, max_overflow=0, pool_pre_ping=True)

        _engine = create_async_engine(settings.database_url, **engine_kwargs)
        _session_factory = async_sessionmaker(
            _engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    return _session_factory


async def get_db() -> AsyncSession:
    """Dependency for getting async database session"""
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db() -> None:
    """Create the events table if it does not exist"""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
