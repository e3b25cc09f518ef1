"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.server.core.config import settings

from .utils import create_engine, create_sessionmaker

engine = create_engine(settings.database.url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def dispose_engine() -> None:
    """Close every pooled connection; called on application shutdown."""
    await engine.dispose()
