"""
Event I/O models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .common import UTCDateTime


class EventCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    start_date: UTCDateTime
    end_date: UTCDateTime
    venue: str = Field(min_length=1)
    address: Optional[str] = None
    max_attendees: Optional[int] = Field(default=None, gt=0)
    registration_deadline: Optional[UTCDateTime] = None
    is_active: bool = False
    event_type: str = "job_fair"


class EventUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    max_attendees: Optional[int] = Field(default=None, gt=0)
    registration_deadline: Optional[UTCDateTime] = None
    event_type: Optional[str] = None


class EventDuplicate(BaseModel):
    new_name: str = Field(min_length=1)
