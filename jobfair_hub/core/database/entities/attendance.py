"""
Attendance record entity models.

Attendance records are the audit trail of the check-in workflow: every
successful verification writes one row, duplicates included.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class VerificationMethod(str, Enum):
    PIN = "pin"
    TICKET_NUMBER = "ticket_number"
    MANUAL = "manual"


class AttendanceStatus(str, Enum):
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    FLAGGED = "flagged"


class AttendanceRecord(Base, table=True):
    """Entity for check-in audit rows.

    ``verified_by`` is a ``security_personnel`` id or ``None`` when the
    check-in was made by an admin or an unknown verifier.

    Table: attendance_records
    """

    __tablename__ = "attendance_records"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    job_seeker_id: str = Field(foreign_key="job_seekers.id", ondelete="CASCADE", max_length=64, index=True)
    event_id: str = Field(foreign_key="events.id", ondelete="CASCADE", max_length=64, index=True)
    checkpoint_id: Optional[str] = Field(default=None, foreign_key="checkpoints.id", ondelete="SET NULL", max_length=128)
    verified_by: Optional[str] = Field(default=None, foreign_key="security_personnel.id", ondelete="SET NULL", max_length=64, index=True)

    check_in_time: datetime = Field(default_factory=utc_now, index=True)
    check_out_time: Optional[datetime] = Field(default=None)
    verification_method: str = Field(max_length=32)
    verification_data: Optional[str] = Field(default=None)
    status: str = Field(default=AttendanceStatus.CHECKED_IN.value, max_length=32, index=True)
    notes: Optional[str] = Field(default=None)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    device_info: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return (
            f"AttendanceRecord(id={self.id}, job_seeker_id={self.job_seeker_id}, "
            f"event_id={self.event_id}, status={self.status})"
        )
