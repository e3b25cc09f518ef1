"""
Attendance record repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.attendance import AttendanceRecord, AttendanceStatus
from .base import SQLModelRepository


class AttendanceRecordRepository(SQLModelRepository[AttendanceRecord]):
    """Repository for attendance records using SQLModel."""

    order_by = "check_in_time"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AttendanceRecord)

    async def latest_check_in(self, job_seeker_id: str) -> Optional[AttendanceRecord]:
        """Most recent ``checked_in`` record of a job seeker, if any."""
        stmt = (
            select(AttendanceRecord)
            .where(
                (AttendanceRecord.job_seeker_id == job_seeker_id)
                & (AttendanceRecord.status == AttendanceStatus.CHECKED_IN.value)
            )
            .order_by(AttendanceRecord.check_in_time.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count_since(self, since: datetime, verified_by: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(AttendanceRecord).where(AttendanceRecord.check_in_time >= since)
        if verified_by is not None:
            stmt = stmt.where(AttendanceRecord.verified_by == verified_by)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_with_verifier(self) -> List[AttendanceRecord]:
        stmt = select(AttendanceRecord).where(AttendanceRecord.verified_by.is_not(None))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
