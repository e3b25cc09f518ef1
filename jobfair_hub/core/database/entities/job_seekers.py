"""
Job seeker entity models.

A job seeker profile carries the attendee credentials (PIN and ticket
number) used at the security checkpoints, plus CV data and the booth
assignment workflow status.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AssignmentStatus(str, Enum):
    UNASSIGNED = "unassigned"
    ASSIGNED = "assigned"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


class JobSeeker(Base, table=True):
    """Entity for job seeker profiles.

    ``pin`` and ``ticket_number`` are unique and are the two lookup keys of
    the check-in workflow.

    Table: job_seekers
    """

    __tablename__ = "job_seekers"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=64, index=True)

    bio: Optional[str] = Field(default=None)
    cv_url: Optional[str] = Field(default=None)
    skills: List[str] = Field(default_factory=list, sa_type=JSON)
    experience: Optional[str] = Field(default=None)
    education: Optional[str] = Field(default=None)

    pin: Optional[str] = Field(default=None, max_length=6, unique=True, index=True)
    ticket_number: Optional[str] = Field(default=None, max_length=32, unique=True, index=True)
    pin_generated_at: Optional[datetime] = Field(default=None)
    pin_expires_at: Optional[datetime] = Field(default=None)

    registration_status: str = Field(default=RegistrationStatus.PENDING.value, max_length=32, index=True)
    assignment_status: str = Field(default=AssignmentStatus.UNASSIGNED.value, max_length=32, index=True)
    priority_level: str = Field(default="normal", max_length=32)
    interest_categories: List[str] = Field(default_factory=list, sa_type=JSON)
    linkedin_url: Optional[str] = Field(default=None)
    portfolio_url: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"JobSeeker(id={self.id}, user_id={self.user_id}, status={self.registration_status})"
