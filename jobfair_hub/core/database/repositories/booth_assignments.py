"""
Booth assignment repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.booth_assignments import BoothAssignment, BoothAssignmentStatus
from .base import SQLModelRepository

_OPEN_STATUSES = (BoothAssignmentStatus.ASSIGNED.value, BoothAssignmentStatus.CONFIRMED.value)


class BoothAssignmentRepository(SQLModelRepository[BoothAssignment]):
    """Repository for booth assignments using SQLModel."""

    order_by = "assigned_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BoothAssignment)

    async def find_open(self, job_seeker_id: str, booth_id: str) -> Optional[BoothAssignment]:
        """An ``assigned`` or ``confirmed`` assignment of the seeker to the booth."""
        stmt = select(BoothAssignment).where(
            (BoothAssignment.job_seeker_id == job_seeker_id)
            & (BoothAssignment.booth_id == booth_id)
            & (BoothAssignment.status.in_(_OPEN_STATUSES))
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
