"""
Security personnel and incident I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class SecurityProfileSetup(BaseModel):
    badge_number: str = Field(min_length=1)
    department: Optional[str] = None
    clearance_level: str = "basic"
    phone_number: Optional[str] = None


class IncidentReport(BaseModel):
    incident_type: str
    severity: str
    location: str = Field(min_length=1)
    description: str = Field(min_length=1)
    involved_persons: List[str] = Field(default_factory=list)
    action_taken: Optional[str] = None


class IncidentStatusUpdate(BaseModel):
    status: str
    action_taken: Optional[str] = None


class IncidentRead(BaseModel):
    id: str
    event_id: str
    reported_by: str
    incident_type: str
    severity: str
    location: str
    description: str
    status: str
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
