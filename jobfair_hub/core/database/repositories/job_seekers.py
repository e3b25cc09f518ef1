"""
Job seeker repository.

Besides CRUD this provides the credential lookups of the check-in workflow.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.job_seekers import JobSeeker, RegistrationStatus
from .base import SQLModelRepository


class JobSeekerRepository(SQLModelRepository[JobSeeker]):
    """Repository for job seeker profiles using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, JobSeeker)

    async def _first(self, stmt) -> Optional[JobSeeker]:
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_user_id(self, user_id: str) -> Optional[JobSeeker]:
        return await self._first(select(JobSeeker).where(JobSeeker.user_id == user_id))

    async def get_by_pin(self, pin: str) -> Optional[JobSeeker]:
        return await self._first(select(JobSeeker).where(JobSeeker.pin == pin))

    async def get_by_ticket_number(self, ticket_number: str) -> Optional[JobSeeker]:
        return await self._first(select(JobSeeker).where(JobSeeker.ticket_number == ticket_number))

    async def pin_exists(self, pin: str) -> bool:
        return await self.get_by_pin(pin) is not None

    async def ticket_number_exists(self, ticket_number: str) -> bool:
        return await self.get_by_ticket_number(ticket_number) is not None

    async def list_pending(self) -> List[JobSeeker]:
        stmt = select(JobSeeker).where(JobSeeker.registration_status == RegistrationStatus.PENDING.value)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
