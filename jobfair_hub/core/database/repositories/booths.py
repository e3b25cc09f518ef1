"""
Booth and interview slot repositories.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.booths import Booth, InterviewSlot
from .base import SQLModelRepository


class BoothRepository(SQLModelRepository[Booth]):
    """Repository for booths using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Booth)

    async def get_by_employer_and_event(self, employer_id: str, event_id: str) -> Optional[Booth]:
        stmt = select(Booth).where((Booth.employer_id == employer_id) & (Booth.event_id == event_id))
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_employer(self, employer_id: str) -> List[Booth]:
        stmt = select(Booth).where(Booth.employer_id == employer_id).order_by(Booth.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_number(self, event_id: str, booth_number: str, exclude_id: Optional[str] = None) -> Optional[Booth]:
        stmt = select(Booth).where((Booth.event_id == event_id) & (Booth.booth_number == booth_number))
        if exclude_id is not None:
            stmt = stmt.where(Booth.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_event(self, event_id: str) -> List[Booth]:
        stmt = select(Booth).where(Booth.event_id == event_id).order_by(Booth.booth_number)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class InterviewSlotRepository(SQLModelRepository[InterviewSlot]):
    """Repository for interview slots using SQLModel."""

    order_by = "start_time"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, InterviewSlot)

    async def list_by_booth(self, booth_id: str) -> List[InterviewSlot]:
        stmt = select(InterviewSlot).where(InterviewSlot.booth_id == booth_id).order_by(InterviewSlot.start_time)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_overlapping(
        self, booth_id: str, start_time: datetime, end_time: datetime, exclude_id: Optional[str] = None
    ) -> Optional[InterviewSlot]:
        """Return a slot on the booth whose interval intersects ``[start_time, end_time)``."""
        stmt = select(InterviewSlot).where(
            (InterviewSlot.booth_id == booth_id)
            & (InterviewSlot.start_time < end_time)
            & (InterviewSlot.end_time > start_time)
        )
        if exclude_id is not None:
            stmt = stmt.where(InterviewSlot.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()
