"""
Security personnel and incident repositories.
"""

from __future__ import annotations

from typing import List, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.security import IncidentStatus, SecurityIncident, SecurityPersonnel
from .base import SQLModelRepository


class SecurityPersonnelRepository(SQLModelRepository[SecurityPersonnel]):
    """Repository for security staff profiles using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SecurityPersonnel)

    async def get_by_user_id(self, user_id: str) -> Optional[SecurityPersonnel]:
        stmt = select(SecurityPersonnel).where(SecurityPersonnel.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_badge_number(self, badge_number: str) -> Optional[SecurityPersonnel]:
        stmt = select(SecurityPersonnel).where(SecurityPersonnel.badge_number == badge_number)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def all_ids(self) -> Set[str]:
        result = await self.session.execute(select(SecurityPersonnel.id))
        return set(result.scalars().all())


class SecurityIncidentRepository(SQLModelRepository[SecurityIncident]):
    """Repository for security incidents using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SecurityIncident)

    async def list_open(self) -> List[SecurityIncident]:
        stmt = (
            select(SecurityIncident)
            .where(SecurityIncident.status == IncidentStatus.OPEN.value)
            .order_by(SecurityIncident.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
