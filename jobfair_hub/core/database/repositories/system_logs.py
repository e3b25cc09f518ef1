"""
System log repository.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.system_logs import SystemLog
from .base import SQLModelRepository


class SystemLogRepository(SQLModelRepository[SystemLog]):
    """Repository for audit log entries using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SystemLog)
