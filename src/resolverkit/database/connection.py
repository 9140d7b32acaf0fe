"""
Database engine and session factory helpers
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)


def get_async_url(database_url: str) -> str:
    """Map a plain database URL onto its async driver."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def create_engine_from_settings(database_url: str | None = None) -> AsyncEngine:
    """Create an async engine using the configured pool settings."""
    db_url = get_async_url(database_url or settings.database_url)

    # SQLite pools do not accept size/overflow tuning
    if db_url.startswith("sqlite"):
        engine = create_async_engine(db_url, echo=settings.sql_echo)
    else:
        engine = create_async_engine(
            db_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            echo=settings.sql_echo,
        )

    logger.info("Database engine created", database_url=engine.url.render_as_string())
    return engine


def create_session_factory(
    engine: AsyncEngine | None = None, database_url: str | None = None
) -> async_sessionmaker[AsyncSession]:
    """
    Build a session factory suitable for ``SQLAlchemyInstanceStore``.

    Instances outlive the transactions that load and mutate them, so objects
    must not be expired on commit.
    """
    return async_sessionmaker(
        engine or create_engine_from_settings(database_url),
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@asynccontextmanager
async def open_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session that commits on success and rolls back on error."""
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
