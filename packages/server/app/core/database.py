"""
Async engine and session handling for the Timeline database.

One session per request: the FastAPI dependency commits when the handler
returns and rolls back if it raises. Scripts use ``session_scope``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.core.config import get_settings

log = structlog.get_logger()
settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

SessionFactory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables() -> None:
    """Create missing tables from the SQLModel metadata. Migrations own production schemas."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """A session committed on success and rolled back on any error."""
    async with SessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            log.warning("db.session_rolled_back")
            raise


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding the request's session."""
    async with session_scope() as session:
        yield session
