"""
Job posting entity models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class JobType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class Job(Base, table=True):
    """Entity for job openings an employer brings to an event.

    Interview slots and shortlist entries may point at a job.

    Table: jobs
    """

    __tablename__ = "jobs"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    employer_id: str = Field(foreign_key="employers.id", ondelete="CASCADE", max_length=64, index=True)
    event_id: str = Field(foreign_key="events.id", ondelete="CASCADE", max_length=64, index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    requirements: List[str] = Field(default_factory=list, sa_type=JSON)
    benefits: List[str] = Field(default_factory=list, sa_type=JSON)
    salary_range: Optional[str] = Field(default=None, max_length=128)
    job_type: Optional[str] = Field(default=None, max_length=32)
    location: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, max_length=128, index=True)
    experience_level: Optional[str] = Field(default=None, max_length=32)
    is_active: bool = Field(default=True, index=True)
    application_deadline: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Job(id={self.id}, title={self.title}, employer_id={self.employer_id})"
