"""Async engine, session factory, and the unit-of-work commit helper."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from imagehoster.core.config import settings
from imagehoster.core.errors import TransactionFailure

logger = logging.getLogger("imagehoster.db")


def make_engine(database_url: str) -> AsyncEngine:
    """Create an engine; SQLite connections may be shared across threads."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_async_engine(database_url, future=True, connect_args=connect_args)


engine = make_engine(settings.database_url)
async_session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


async def commit_or_rollback(session: AsyncSession, operation: str) -> None:
    """Commit the pending unit of work, rolling it back entirely on failure."""
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning("Rolled back %s: %s", operation, exc.__class__.__name__)
        raise TransactionFailure(f"Could not {operation}") from exc
