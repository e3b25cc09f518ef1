"""
Event and checkpoint entity models.

At most one event is expected to be active at a time; check-ins are always
recorded against the active event. Checkpoints are the physical locations
of an event and only carry crowd-control accounting.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class EventType(str, Enum):
    JOB_FAIR = "job_fair"
    CAREER_EXPO = "career_expo"
    NETWORKING = "networking"
    CONFERENCE = "conference"


class CheckpointType(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"
    BOOTH_AREA = "booth_area"
    MAIN_HALL = "main_hall"
    REGISTRATION = "registration"


class Event(Base, table=True):
    """Entity for events.

    Table: events
    """

    __tablename__ = "events"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    start_date: datetime = Field(index=True)
    end_date: datetime
    venue: str = Field(max_length=255)
    address: Optional[str] = Field(default=None)
    max_attendees: Optional[int] = Field(default=None)
    registration_deadline: Optional[datetime] = Field(default=None)
    is_active: bool = Field(default=True, index=True)
    event_type: str = Field(default=EventType.JOB_FAIR.value, max_length=32)
    created_by: Optional[str] = Field(default=None, foreign_key="users.id", ondelete="SET NULL", max_length=64)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Event(id={self.id}, name={self.name}, active={self.is_active})"


class Checkpoint(Base, table=True):
    """Entity for event checkpoints.

    Table: checkpoints
    """

    __tablename__ = "checkpoints"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=128)
    event_id: str = Field(foreign_key="events.id", ondelete="CASCADE", max_length=64, index=True)
    name: str = Field(max_length=255)
    location: str = Field(max_length=255)
    checkpoint_type: str = Field(default=CheckpointType.ENTRY.value, max_length=32)
    is_active: bool = Field(default=True)
    requires_verification: bool = Field(default=True)
    max_capacity: Optional[int] = Field(default=None)
    current_occupancy: int = Field(default=0)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Checkpoint(id={self.id}, event_id={self.event_id}, type={self.checkpoint_type})"
