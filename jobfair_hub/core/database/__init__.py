"""
Database layer for Job Fair Hub.

Structure:
- entities/: SQLModel table entities organized by business domain
- repositories/: Async data access layer, one repository per table
- session.py: Global engine and session factory management
- utils.py: Engine, session factory and table creation helpers
"""

from .base import Base
from .session import (
    async_session_maker,
    dispose_engine,
    engine,
    get_session,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "dispose_engine",
    "engine",
    "get_session",
]
