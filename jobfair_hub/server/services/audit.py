"""
Audit log and in-app notification writers.

Both are best-effort: a failed write is logged and rolled back but never
fails the operation that triggered it. Callers commit their own work first.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.core.database.entities import Notification, NotificationType, SystemLog
from jobfair_hub.core.database.repositories import build_sql_repos_from_session

logger = logging.getLogger(__name__)


class AuditService:
    """Writes ``system_logs`` and ``notifications`` rows."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def log_system_action(
        self,
        user_id: Optional[str],
        action: str,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        success: bool = True,
        error_message: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[SystemLog]:
        """Record an action in the audit log.

        Args:
            user_id: Acting user, if known
            action: Verb such as ``create_event`` or ``approve_job_seeker``
            resource: Affected resource type
            resource_id: Affected resource id
            details: Extra JSON payload
            success: Whether the action succeeded
            error_message: Failure reason when ``success`` is false

        Returns:
            The stored entry, or ``None`` if the write failed
        """
        entry = SystemLog(
            user_id=user_id,
            action=action,
            resource=resource,
            resource_id=resource_id,
            details=details or {},
            success=success,
            error_message=error_message,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        try:
            return await self.repos.system_logs.create(entry)
        except Exception as e:
            logger.warning(f"Failed to write system log {action} on {resource}: {e}")
            await self.session.rollback()
            return None

    async def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        action_url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        expires_at: Optional[datetime] = None,
    ) -> Optional[Notification]:
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=NotificationType(type).value,
            action_url=action_url,
            details=details or {},
            expires_at=expires_at,
        )
        try:
            return await self.repos.notifications.create(notification)
        except Exception as e:
            logger.warning(f"Failed to write notification for user {user_id}: {e}")
            await self.session.rollback()
            return None

    async def notify_many(self, user_ids: Iterable[str], title: str, message: str, **kwargs: Any) -> List[Notification]:
        sent = []
        for user_id in user_ids:
            notification = await self.notify(user_id, title, message, **kwargs)
            if notification is not None:
                sent.append(notification)
        return sent

    async def recent_activity(self, limit: int = 10) -> List[SystemLog]:
        return await self.repos.system_logs.list(limit=limit)
