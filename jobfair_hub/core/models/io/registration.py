"""
Job seeker registration I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobSeekerProfileCreate(BaseModel):
    """Schema for creating a job seeker profile."""

    full_name: str = Field(min_length=1, description="Name shown to employers and security staff")
    phone_number: str = Field(min_length=1, description="Contact phone number")
    bio: Optional[str] = None
    cv_url: Optional[str] = Field(default=None, description="Location of the uploaded CV")
    skills: List[str] = Field(default_factory=list)
    experience: Optional[str] = None
    education: Optional[str] = None
    interest_categories: List[str] = Field(default_factory=list)
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None


class JobSeekerProfileUpdate(BaseModel):
    """Schema for updating a job seeker profile; unset fields are left alone."""

    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    cv_url: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    interest_categories: Optional[List[str]] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None


class JobSeekerRead(BaseModel):
    """Schema for reading a job seeker profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    bio: Optional[str] = None
    cv_url: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience: Optional[str] = None
    education: Optional[str] = None
    pin: Optional[str] = None
    ticket_number: Optional[str] = None
    registration_status: str
    assignment_status: str
    priority_level: str
    interest_categories: List[str] = Field(default_factory=list)
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    pin_generated_at: Optional[datetime] = None
    pin_expires_at: Optional[datetime] = None
    created_at: datetime


class UserRead(BaseModel):
    """Schema for reading a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    email: str
    role: str
    phone_number: Optional[str] = None
    is_active: bool
    image: Optional[str] = None
    created_at: datetime


class UserProfileRead(BaseModel):
    user: UserRead
    job_seeker: Optional[JobSeekerRead] = None


class PinCheckRequest(BaseModel):
    """Schema for checking an attendee's ticket and PIN pair."""

    ticket_number: str
    pin: str


class PinCheckResult(BaseModel):
    valid: bool
    message: str
    job_seeker_id: Optional[str] = None
    ticket_number: Optional[str] = None
    expired: bool = False
