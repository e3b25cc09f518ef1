"""
In-app notification entity models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    SECURITY_ALERT = "security_alert"


class Notification(Base, table=True):
    """Entity for notifications shown in the application.

    Table: notifications
    """

    __tablename__ = "notifications"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=64, index=True)
    title: str = Field(max_length=255)
    message: str
    type: str = Field(default=NotificationType.INFO.value, max_length=32)
    is_read: bool = Field(default=False, index=True)
    action_url: Optional[str] = Field(default=None)
    details: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    expires_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Notification(id={self.id}, user_id={self.user_id}, type={self.type}, read={self.is_read})"
