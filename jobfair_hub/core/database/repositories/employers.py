"""
Employer repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.employers import Employer
from .base import SQLModelRepository


class EmployerRepository(SQLModelRepository[Employer]):
    """Repository for employer profiles using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Employer)

    async def get_by_user_id(self, user_id: str) -> Optional[Employer]:
        stmt = select(Employer).where(Employer.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_unverified(self) -> List[Employer]:
        stmt = select(Employer).where(Employer.is_verified == False)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
