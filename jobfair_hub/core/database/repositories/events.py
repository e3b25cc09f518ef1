"""
Event and checkpoint repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.events import Checkpoint, Event
from .base import SQLModelRepository


class EventRepository(SQLModelRepository[Event]):
    """Repository for events using SQLModel."""

    order_by = "start_date"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Event)

    async def get_active(self) -> Optional[Event]:
        """Return the active event with the earliest start date."""
        stmt = select(Event).where(Event.is_active == True).order_by(Event.start_date.asc())  # noqa: E712
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def deactivate_all(self, except_id: Optional[str] = None) -> None:
        """Mark every active event inactive, optionally sparing one. Does not commit."""
        stmt = update(Event).where(Event.is_active == True)  # noqa: E712
        if except_id is not None:
            stmt = stmt.where(Event.id != except_id)
        await self.session.execute(stmt.values(is_active=False, updated_at=utc_now()))


class CheckpointRepository(SQLModelRepository[Checkpoint]):
    """Repository for event checkpoints using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Checkpoint)

    async def list_by_event(self, event_id: str) -> List[Checkpoint]:
        stmt = select(Checkpoint).where(Checkpoint.event_id == event_id).order_by(Checkpoint.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
