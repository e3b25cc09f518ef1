"""
Job posting repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.jobs import Job
from .base import SQLModelRepository


class JobRepository(SQLModelRepository[Job]):
    """Repository for job postings using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Job)

    async def list_by_employer(
        self, employer_id: str, event_id: Optional[str] = None, active_only: bool = False
    ) -> List[Job]:
        stmt = select(Job).where(Job.employer_id == employer_id)
        if event_id is not None:
            stmt = stmt.where(Job.event_id == event_id)
        if active_only:
            stmt = stmt.where(Job.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt.order_by(Job.created_at.desc()))
        return list(result.scalars().all())
