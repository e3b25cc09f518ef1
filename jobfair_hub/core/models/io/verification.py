"""
Check-in verification I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PinVerificationRequest(BaseModel):
    pin: str = Field(description="Six-digit attendee PIN")


class TicketVerificationRequest(BaseModel):
    ticket_number: str = Field(description="Ticket number in HCS-YYYY-XXXXXXXX form")


class QRVerificationRequest(BaseModel):
    qr_data: str = Field(description="Raw text scanned from the attendee QR code")


class AttendeeInfo(BaseModel):
    """Attendee summary returned to security staff after a verification."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    pin: Optional[str] = None
    ticket_number: Optional[str] = None
    registration_status: str
    check_in_time: Optional[datetime] = Field(
        default=None, description="Time of the earlier check-in when the attendee was already checked in"
    )
    already_checked_in: bool = False


class VerificationResponse(BaseModel):
    success: bool
    message: str
    attendee: Optional[AttendeeInfo] = None


class AttendanceHistoryItem(BaseModel):
    id: str
    job_seeker_id: str
    attendee_name: Optional[str] = None
    event_id: str
    verified_by: Optional[str] = None
    check_in_time: datetime
    verification_method: str
    status: str
    notes: Optional[str] = None


class SecurityStats(BaseModel):
    today_check_ins: int
    my_check_ins: int
    open_incidents: int
