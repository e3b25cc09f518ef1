"""
Shortlist and candidate interaction entity models.

Employers curate shortlists of job seekers; every notable action on a
candidate is also written to ``candidate_interactions`` for analytics.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class ShortlistStatus(str, Enum):
    INTERESTED = "interested"
    MAYBE = "maybe"
    NOT_INTERESTED = "not_interested"
    CONTACTED = "contacted"
    INTERVIEWED = "interviewed"
    OFFERED = "offered"


class ShortlistPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InteractionType(str, Enum):
    BOOTH_VISIT = "booth_visit"
    CV_VIEWED = "cv_viewed"
    CONTACT_INFO_ACCESSED = "contact_info_accessed"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    NOTE_ADDED = "note_added"
    SHORTLISTED = "shortlisted"


DEFAULT_LIST_NAME = "Main Shortlist"


class Shortlist(Base, table=True):
    """Entity for shortlist entries.

    Table: shortlists
    """

    __tablename__ = "shortlists"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    employer_id: str = Field(foreign_key="employers.id", ondelete="CASCADE", max_length=64, index=True)
    job_id: Optional[str] = Field(default=None, foreign_key="jobs.id", ondelete="CASCADE", max_length=64)
    event_id: Optional[str] = Field(default=None, foreign_key="events.id", ondelete="CASCADE", max_length=64)
    job_seeker_id: str = Field(foreign_key="job_seekers.id", ondelete="CASCADE", max_length=64, index=True)
    list_name: str = Field(default=DEFAULT_LIST_NAME, max_length=255)
    status: str = Field(default=ShortlistStatus.INTERESTED.value, max_length=32)
    priority: str = Field(default=ShortlistPriority.MEDIUM.value, max_length=16)
    notes: Optional[str] = Field(default=None)
    tags: List[str] = Field(default_factory=list, sa_type=JSON)
    added_by: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=64)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Shortlist(id={self.id}, employer_id={self.employer_id}, job_seeker_id={self.job_seeker_id})"


class CandidateInteraction(Base, table=True):
    """Entity for employer/candidate interaction events.

    Table: candidate_interactions
    """

    __tablename__ = "candidate_interactions"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    employer_id: str = Field(foreign_key="employers.id", ondelete="CASCADE", max_length=64, index=True)
    job_seeker_id: str = Field(foreign_key="job_seekers.id", ondelete="CASCADE", max_length=64, index=True)
    event_id: Optional[str] = Field(default=None, foreign_key="events.id", ondelete="CASCADE", max_length=64)
    interaction_type: str = Field(max_length=32)
    duration: Optional[int] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    rating: Optional[int] = Field(default=None)
    details: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    performed_by: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=64)

    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"CandidateInteraction(id={self.id}, type={self.interaction_type}, employer_id={self.employer_id})"
