"""
Notification repository.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.notifications import Notification
from .base import SQLModelRepository


class NotificationRepository(SQLModelRepository[Notification]):
    """Repository for in-app notifications using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def list_for_user(self, user_id: str, unread_only: bool = False, limit: int = 50) -> List[Notification]:
        stmt = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            stmt = stmt.where(Notification.is_read == False)  # noqa: E712
        stmt = stmt.order_by(Notification.created_at.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_read(self, user_id: str, notification_id: str) -> bool:
        """Mark one of the user's notifications read; False if it is not theirs."""
        stmt = (
            update(Notification)
            .where((Notification.id == notification_id) & (Notification.user_id == user_id))
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0
