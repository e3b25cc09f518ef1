"""
Booth and interview slot entity models.

An employer gets one booth per event; interview slots are time windows at a
booth that the admin can book for assigned job seekers.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class Booth(Base, table=True):
    """Entity for employer booths.

    Table: booths
    """

    __tablename__ = "booths"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    event_id: str = Field(foreign_key="events.id", ondelete="CASCADE", max_length=64, index=True)
    employer_id: Optional[str] = Field(default=None, foreign_key="employers.id", ondelete="CASCADE", max_length=64, index=True)
    booth_number: str = Field(max_length=32)
    location: str = Field(max_length=255)
    size: Optional[str] = Field(default=None, max_length=32)
    equipment: List[str] = Field(default_factory=list, sa_type=JSON)
    special_requirements: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Booth(id={self.id}, booth_number={self.booth_number}, employer_id={self.employer_id})"


class InterviewSlot(Base, table=True):
    """Entity for interview time slots at a booth.

    ``end_time`` is always ``start_time`` plus ``duration`` minutes.

    Table: interview_slots
    """

    __tablename__ = "interview_slots"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    booth_id: str = Field(foreign_key="booths.id", ondelete="CASCADE", max_length=64, index=True)
    job_id: Optional[str] = Field(default=None, foreign_key="jobs.id", ondelete="SET NULL", max_length=64)
    start_time: datetime = Field(index=True)
    end_time: datetime
    duration: int = Field(default=30)
    is_booked: bool = Field(default=False)
    interviewer_name: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"InterviewSlot(id={self.id}, booth_id={self.booth_id}, start={self.start_time}, booked={self.is_booked})"
