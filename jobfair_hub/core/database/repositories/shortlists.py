"""
Shortlist and candidate interaction repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.shortlists import CandidateInteraction, Shortlist
from .base import SQLModelRepository


class ShortlistRepository(SQLModelRepository[Shortlist]):
    """Repository for shortlist entries using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Shortlist)

    async def find_entry(self, employer_id: str, job_seeker_id: str, job_id: Optional[str]) -> Optional[Shortlist]:
        """Existing entry for the same employer, candidate and job (``None`` job matches ``NULL``)."""
        stmt = select(Shortlist).where(
            (Shortlist.employer_id == employer_id) & (Shortlist.job_seeker_id == job_seeker_id)
        )
        if job_id is None:
            stmt = stmt.where(Shortlist.job_id.is_(None))
        else:
            stmt = stmt.where(Shortlist.job_id == job_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()


class CandidateInteractionRepository(SQLModelRepository[CandidateInteraction]):
    """Repository for candidate interactions using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CandidateInteraction)

    async def list_for_employer(self, employer_id: str, limit: Optional[int] = None) -> List[CandidateInteraction]:
        return await self.list(limit=limit, filters={"employer_id": employer_id})
