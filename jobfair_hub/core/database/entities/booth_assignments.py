"""
Booth assignment entity models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class BoothAssignmentStatus(str, Enum):
    ASSIGNED = "assigned"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class BoothAssignment(Base, table=True):
    """Entity for admin assignments of job seekers to booths.

    Table: booth_assignments
    """

    __tablename__ = "booth_assignments"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    job_seeker_id: str = Field(foreign_key="job_seekers.id", ondelete="CASCADE", max_length=64, index=True)
    booth_id: str = Field(foreign_key="booths.id", ondelete="CASCADE", max_length=64, index=True)
    interview_slot_id: Optional[str] = Field(default=None, foreign_key="interview_slots.id", ondelete="SET NULL", max_length=64)
    assigned_by: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=64)
    assigned_at: datetime = Field(default_factory=utc_now)
    status: str = Field(default=BoothAssignmentStatus.ASSIGNED.value, max_length=32, index=True)
    interview_date: Optional[datetime] = Field(default=None)
    interview_time: Optional[str] = Field(default=None, max_length=16)
    notes: Optional[str] = Field(default=None)
    priority: str = Field(default="normal", max_length=16)
    notification_sent: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"BoothAssignment(id={self.id}, job_seeker_id={self.job_seeker_id}, booth_id={self.booth_id}, status={self.status})"
