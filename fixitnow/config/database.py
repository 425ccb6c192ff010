"""
Database engine and session management.

The API shares one engine for the lifetime of the process. Celery tasks run
each invocation on a fresh event loop, and an async engine cannot outlive the
loop it was used on, so they get a private engine through
``isolated_session_factory``.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from fixitnow.config.logging import get_logger
from fixitnow.config.settings import settings

logger = get_logger(__name__)


def get_database_url() -> str:
    """Get database URL from settings."""
    return str(settings.DATABASE_URL)


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create async SQLAlchemy engine; SQLite and tests run without a pool."""
    url = database_url or get_database_url()

    if settings.ENVIRONMENT == "test" or url.startswith("sqlite"):
        return create_async_engine(url, echo=settings.DATABASE_ECHO, poolclass=NullPool)

    return create_async_engine(
        url,
        echo=settings.DATABASE_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Entities are mapped out of the models right after commit
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine = create_engine()
async_session_factory = make_session_factory(engine)


@asynccontextmanager
async def isolated_session_factory(
    database_url: Optional[str] = None,
) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Yield a session factory on a private engine, disposed on exit."""
    private_engine = create_engine(database_url)
    try:
        yield make_session_factory(private_engine)
    finally:
        await private_engine.dispose()


async def dispose_engine() -> None:
    """Close the pooled connections of the shared engine."""
    await engine.dispose()
    logger.info("Database engine disposed")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency yielding the request-scoped session."""
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
