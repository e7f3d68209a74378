# FILE: database/engine.py

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from .db_config import get_database_url
from .models import Base
from .models import kv_record  # noqa: F401  (registers the table on Base.metadata)

LOGGER = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_async_session_maker: async_sessionmaker[AsyncSession] | None = None


async def init_db(db_url: Optional[str] = None) -> None:
    """Initializes the database engine and session maker and creates missing tables."""
    global _engine, _async_session_maker

    if _engine:
        LOGGER.info("Database engine is already initialized.")
        return

    try:
        db_url = db_url or get_database_url()

        if db_url.startswith("sqlite"):
            # aiosqlite connections belong to the loop that opened them.
            _engine = create_async_engine(db_url, poolclass=NullPool, echo=False)
        else:
            _engine = create_async_engine(
                db_url,
                pool_recycle=3600,
                pool_pre_ping=True,
                echo=False,
            )

        async with _engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        _async_session_maker = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        LOGGER.info("SQLAlchemy async engine and session maker created successfully.")

    except Exception as e:
        LOGGER.critical(f"Failed to create SQLAlchemy engine: {e}", exc_info=True)
        if _engine:
            await _engine.dispose()
        _engine = None
        _async_session_maker = None


async def close_db() -> None:
    """Closes the database engine connections."""
    global _engine, _async_session_maker
    if _engine:
        LOGGER.info("Closing SQLAlchemy engine connections.")
        await _engine.dispose()
        _engine = None
        _async_session_maker = None


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provides a transactional database session."""
    if _async_session_maker is None:
        # Re-try initialization if the first attempt (at startup) failed
        await init_db()
        if _async_session_maker is None:
            raise ConnectionError("Database session maker is not initialized and failed to re-initialize.")

    async with _async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
