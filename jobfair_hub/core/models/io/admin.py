"""
Admin back-office I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .common import UTCDateTime


class RoleChange(BaseModel):
    role: str


class JobSeekerApproval(BaseModel):
    job_seeker_id: Optional[str] = None


class BoothAssignmentCreate(BaseModel):
    job_seeker_id: str
    booth_id: str
    interview_slot_id: Optional[str] = None
    interview_date: Optional[UTCDateTime] = None
    interview_time: Optional[str] = None
    notes: Optional[str] = None
    priority: str = "normal"


class BulkAssignmentCreate(BaseModel):
    job_seeker_ids: List[str] = Field(min_length=1)
    booth_id: str
    interview_date: Optional[UTCDateTime] = None
    notes: Optional[str] = None
    priority: str = "normal"


class AssignmentStatusUpdate(BaseModel):
    status: str
    notes: Optional[str] = None


class AssignmentSearch(BaseModel):
    status: Optional[str] = None
    booth_id: Optional[str] = None
    date_from: Optional[UTCDateTime] = None
    date_to: Optional[UTCDateTime] = None
    search: Optional[str] = Field(default=None, description="Substring of candidate, company or booth number")


class UnassignedFilters(BaseModel):
    search: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    priority_level: Optional[str] = None


class NotificationCreate(BaseModel):
    user_id: str
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: str = "info"
    action_url: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    expires_at: Optional[UTCDateTime] = None


class AttendanceFixRequest(BaseModel):
    apply: bool = Field(default=False, description="Write the fix; a dry run only reports when false")


class DashboardStats(BaseModel):
    total_users: int
    new_registrations: int
    verified_employers: int
    active_events: int
    last_updated: datetime


class AdminBoothCreate(BaseModel):
    """Schema for a booth the admin sets up for a company, found by the email of its user."""

    event_id: str
    employer_email: str = Field(min_length=1)
    booth_number: str = Field(min_length=1)
    location: str = Field(min_length=1)
    size: Optional[str] = Field(default=None, description="small, medium or large")
    equipment: List[str] = Field(default_factory=list)
    special_requirements: Optional[str] = None


class UnassignedBoothCreate(BaseModel):
    event_id: str
    booth_number: str = Field(min_length=1)
    location: str = Field(min_length=1)
    size: Optional[str] = None
    equipment: List[str] = Field(default_factory=list)
    special_requirements: Optional[str] = None


class AdminBoothUpdate(BaseModel):
    employer_email: Optional[str] = None
    booth_number: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    size: Optional[str] = None
    equipment: Optional[List[str]] = None
    special_requirements: Optional[str] = None


class BoothEmployerAssignment(BaseModel):
    employer_email: str = Field(min_length=1)
