"""
Security personnel and incident entity models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class ClearanceLevel(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class IncidentType(str, Enum):
    UNAUTHORIZED_ACCESS = "unauthorized_access"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"
    EMERGENCY = "emergency"
    TECHNICAL_ISSUE = "technical_issue"
    OTHER = "other"


class IncidentSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentStatus(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class SecurityPersonnel(Base, table=True):
    """Entity for security staff profiles.

    Table: security_personnel
    """

    __tablename__ = "security_personnel"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=64, index=True)
    badge_number: str = Field(max_length=64, unique=True, index=True)
    department: Optional[str] = Field(default=None, max_length=128)
    clearance_level: str = Field(default=ClearanceLevel.BASIC.value, max_length=32)
    assigned_checkpoints: List[str] = Field(default_factory=list, sa_type=JSON)
    is_on_duty: bool = Field(default=False)
    shift_start: Optional[datetime] = Field(default=None)
    shift_end: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"SecurityPersonnel(id={self.id}, badge_number={self.badge_number}, on_duty={self.is_on_duty})"


class SecurityIncident(Base, table=True):
    """Entity for incidents reported by security staff.

    Table: security_incidents
    """

    __tablename__ = "security_incidents"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    event_id: str = Field(foreign_key="events.id", ondelete="CASCADE", max_length=64, index=True)
    reported_by: str = Field(foreign_key="security_personnel.id", ondelete="CASCADE", max_length=64)
    incident_type: str = Field(max_length=32)
    severity: str = Field(default=IncidentSeverity.LOW.value, max_length=32)
    location: str = Field(max_length=255)
    description: str
    involved_persons: List[str] = Field(default_factory=list, sa_type=JSON)
    action_taken: Optional[str] = Field(default=None)
    status: str = Field(default=IncidentStatus.OPEN.value, max_length=32, index=True)
    resolved_by: Optional[str] = Field(default=None, foreign_key="users.id", ondelete="SET NULL", max_length=64)
    resolved_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"SecurityIncident(id={self.id}, type={self.incident_type}, severity={self.severity}, status={self.status})"
