"""Engine, session factory and schema helpers for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from newsboard.config import Settings
from newsboard.persistence.tables import metadata
from newsboard.util.error import ConfigurationError

ASYNC_DRIVER_PREFIX = "postgresql+asyncpg://"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine described by ``settings.database``.

    Raises:
        ConfigurationError: The url does not use the asyncpg driver
    """
    if not settings.database_url.startswith(ASYNC_DRIVER_PREFIX):
        raise ConfigurationError(
            f"DATABASE__URL must start with {ASYNC_DRIVER_PREFIX}"
        )
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped units of work.

    Objects stay readable after commit and nothing is flushed implicitly;
    repositories flush where they need generated state.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table that doesn't exist yet.

    Used by integration tests and ``scripts/create_schema.py``.
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    """Drop every newsboard table."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
