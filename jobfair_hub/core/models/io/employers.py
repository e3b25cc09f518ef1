"""
Employer, booth, interview slot and shortlist I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import UTCDateTime


class EmployerProfileInput(BaseModel):
    """Schema for creating or updating an employer profile.

    Required fields are checked by the service so the error message can list
    every missing one.
    """

    company_name: Optional[str] = None
    company_description: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None


class EmployerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    company_name: str
    company_description: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    is_verified: bool
    created_at: datetime


class BoothInput(BaseModel):
    event_id: str
    booth_number: str = Field(min_length=1)
    location: str = Field(min_length=1)
    size: Optional[str] = None
    equipment: List[str] = Field(default_factory=list)
    special_requirements: Optional[str] = None


class InterviewSlotCreate(BaseModel):
    booth_id: str
    start_time: UTCDateTime
    duration: int = Field(default=30, gt=0, description="Slot length in minutes")
    job_id: Optional[str] = None
    interviewer_name: Optional[str] = None
    notes: Optional[str] = None


class InterviewSlotUpdate(BaseModel):
    start_time: Optional[UTCDateTime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    interviewer_name: Optional[str] = None
    notes: Optional[str] = None


class SlotSearch(BaseModel):
    """Filters for the interview slot search."""

    booth_id: Optional[str] = None
    status: Optional[str] = Field(default=None, description="available or booked")
    date_from: Optional[UTCDateTime] = None
    date_to: Optional[UTCDateTime] = None
    interviewer: Optional[str] = None


class BulkDeleteRequest(BaseModel):
    slot_ids: List[str] = Field(min_length=1)


class ShortlistCreate(BaseModel):
    job_seeker_id: str
    job_id: Optional[str] = None
    event_id: Optional[str] = None
    list_name: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ShortlistStatusUpdate(BaseModel):
    status: str


class ShortlistNotesUpdate(BaseModel):
    notes: str


class ShortlistEntryRead(BaseModel):
    id: str
    job_seeker_id: str
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    job_id: Optional[str] = None
    list_name: str
    status: str
    priority: str
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime


class InteractionCreate(BaseModel):
    job_seeker_id: str
    interaction_type: str
    event_id: Optional[str] = None
    duration: Optional[int] = None
    notes: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    details: Dict[str, Any] = Field(default_factory=dict)


class JobCreate(BaseModel):
    event_id: str
    title: str = Field(min_length=1)
    description: Optional[str] = None
    requirements: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    salary_range: Optional[str] = None
    job_type: Optional[str] = Field(default=None, description="full_time, part_time, contract or internship")
    location: Optional[str] = None
    category: Optional[str] = None
    experience_level: Optional[str] = Field(default=None, description="entry, mid, senior or executive")
    application_deadline: Optional[UTCDateTime] = None


class JobUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    requirements: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    salary_range: Optional[str] = None
    job_type: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    experience_level: Optional[str] = None
    is_active: Optional[bool] = None
    application_deadline: Optional[UTCDateTime] = None
