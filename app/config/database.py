"""
Database configuration.

Provides async SQLAlchemy engine and session factory.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config.settings import Settings
from app.models.tables import metadata


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create async engine for the configured database.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine
    """
    if settings.database_url.startswith("sqlite"):
        return create_async_engine(
            settings.database_url, echo=settings.database_echo
        )

    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_timeout=30,
    )


def create_session_maker(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create async session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database (create tables if needed)."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database initialized")


async def close_db(engine: AsyncEngine) -> None:
    """Close database connection."""
    await engine.dispose()
    logger.info("Database connection closed")
