"""
System log entity models.

Audit log of administrative and workflow actions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class SystemLog(Base, table=True):
    """Entity for audit log entries.

    Table: system_logs
    """

    __tablename__ = "system_logs"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", ondelete="SET NULL", max_length=64, index=True)
    action: str = Field(max_length=128)
    resource: str = Field(max_length=128)
    resource_id: Optional[str] = Field(default=None, max_length=128)
    details: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None)
    success: bool = Field(default=True)
    error_message: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"SystemLog(id={self.id}, action={self.action}, resource={self.resource}, success={self.success})"
