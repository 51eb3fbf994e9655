"""
Async SQLAlchemy engine and session management.

The engine and session factory are process-wide handles created lazily on
first use and released by close_db() at shutdown.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from dispatch.core.config import settings

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
    pass


_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_engine_for_url(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, applying pool settings only where supported."""
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)

    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an engine. Objects stay readable after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    """Get or create the process-wide engine."""
    global _engine

    if _engine is None:
        _engine = create_engine_for_url(
            settings.database_url,
            echo=settings.database_echo or settings.debug,
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the process-wide session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


@asynccontextmanager
async def get_db_context(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for database sessions outside of request scope."""
    factory = session_factory or get_session_factory()
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create tables that do not exist yet (development convenience)."""
    # Models must be imported so their tables are registered on Base.metadata
    import dispatch.models  # noqa: F401

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("Database tables ensured", url=engine.url.render_as_string(hide_password=True))


async def close_db() -> None:
    """Dispose of the engine and forget the session factory."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None
