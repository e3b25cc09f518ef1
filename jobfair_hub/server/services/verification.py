"""
Attendee verification service.

Security staff check attendees in by PIN, ticket number or the QR payload
that wraps both. A verification never raises to the caller: it returns a
``VerificationResult`` whose ``failure`` tells the HTTP layer which status to
answer with.

Check-ins are idempotent from the attendee's point of view but fully
audited: a second verification of the same attendee still succeeds and
still writes an attendance record, marked as a duplicate attempt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.cache import CacheManager
from jobfair_hub.core.credentials import (
    validate_pin_format,
    validate_qr_code_data,
    validate_ticket_number_format,
)
from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import (
    AttendanceRecord,
    AttendanceStatus,
    IncidentStatus,
    JobSeeker,
    RegistrationStatus,
    User,
    VerificationMethod,
)
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io.verification import (
    AttendanceHistoryItem,
    AttendeeInfo,
    SecurityStats,
)
from jobfair_hub.core.monitoring import log_check_in
from jobfair_hub.server.core.config import settings

from .cached_queries import CachedQueries

logger = logging.getLogger(__name__)

ADMIN_VERIFIER_PREFIX = "admin-"

INVALID_PIN_FORMAT = "Invalid PIN format. Please enter a 6-digit PIN."
INVALID_TICKET_FORMAT = "Invalid ticket format. Expected format: HCS-YYYY-XXXXXXXX"
PIN_NOT_FOUND = "Invalid PIN. No attendee found with this PIN."
TICKET_NOT_FOUND = "Invalid ticket number. No attendee found with this ticket."
NO_ACTIVE_EVENT = "No active event found. Cannot process check-in."
DUPLICATE_NOTE = "Duplicate check-in attempt"
ALREADY_CHECKED_IN = "Attendee was already checked in, but verification logged."
CHECKED_IN = "Attendee successfully verified and checked in."
SYSTEM_ERROR = "Verification failed due to system error. Please try again."


class VerificationFailure(str, Enum):
    INVALID_FORMAT = "invalid_format"
    NOT_FOUND = "not_found"
    NO_ACTIVE_EVENT = "no_active_event"
    SYSTEM_ERROR = "system_error"


@dataclass
class VerificationResult:
    success: bool
    message: str
    attendee: Optional[AttendeeInfo] = None
    failure: Optional[VerificationFailure] = None

    @classmethod
    def failed(cls, failure: VerificationFailure, message: str) -> "VerificationResult":
        return cls(success=False, message=message, failure=failure)


@dataclass(frozen=True)
class ClientInfo:
    """Where a verification request came from, stored on the attendance record."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class VerificationService:
    """Check-in workflow and attendance reporting for security staff."""

    def __init__(self, session: AsyncSession, cache: Optional[CacheManager] = None):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.cached = CachedQueries(session, cache) if cache is not None else None

    async def verifier_id_for(self, user_id: str, is_admin: bool = False) -> Optional[str]:
        """The verifier id a caller checks attendees in under.

        Admins verify under an ``admin-{user_id}`` surrogate; security staff
        under their ``security_personnel`` id.
        """
        if is_admin:
            return f"{ADMIN_VERIFIER_PREFIX}{user_id}"
        personnel = await self.repos.security_personnel.get_by_user_id(user_id)
        return personnel.id if personnel is not None else None

    async def resolve_verifier(self, security_id: Optional[str]) -> Optional[str]:
        """Map the caller's verifier id to a ``security_personnel`` id.

        Admin surrogate ids (``admin-...``) and unknown ids resolve to ``None``
        so a check-in is never attributed to a verifier that does not exist.
        """
        if not security_id or security_id.startswith(ADMIN_VERIFIER_PREFIX):
            return None
        personnel = await self.repos.security_personnel.get_by_id(security_id)
        if personnel is None:
            logger.warning(f"Invalid security personnel ID provided: {security_id}. Proceeding with null verifier.")
            return None
        return personnel.id

    async def verify_attendee_pin(
        self, pin: str, security_id: Optional[str], client: Optional[ClientInfo] = None
    ) -> VerificationResult:
        """Check an attendee in by PIN."""
        if not validate_pin_format(pin):
            return VerificationResult.failed(VerificationFailure.INVALID_FORMAT, INVALID_PIN_FORMAT)
        return await self._verify(
            lookup=(JobSeeker.pin, pin),
            method=VerificationMethod.PIN,
            security_id=security_id,
            not_found_message=PIN_NOT_FOUND,
            client=client,
        )

    async def verify_attendee_ticket(
        self, ticket_number: str, security_id: Optional[str], client: Optional[ClientInfo] = None
    ) -> VerificationResult:
        """Check an attendee in by ticket number."""
        if not validate_ticket_number_format(ticket_number):
            return VerificationResult.failed(VerificationFailure.INVALID_FORMAT, INVALID_TICKET_FORMAT)
        return await self._verify(
            lookup=(JobSeeker.ticket_number, ticket_number),
            method=VerificationMethod.TICKET_NUMBER,
            security_id=security_id,
            not_found_message=TICKET_NOT_FOUND,
            client=client,
        )

    async def verify_attendee_qr(
        self, qr_data: str, security_id: Optional[str], client: Optional[ClientInfo] = None
    ) -> VerificationResult:
        """Check an attendee in from a scanned QR payload.

        The payload is validated (event code, age) and then verified by the
        ticket number it carries.
        """
        validation = validate_qr_code_data(qr_data, event_code=settings.event.code)
        if not validation.valid:
            return VerificationResult.failed(VerificationFailure.INVALID_FORMAT, validation.error or "Invalid QR code")
        return await self.verify_attendee_ticket(str(validation.data["ticketNumber"]), security_id, client)

    async def _verify(
        self,
        lookup: Tuple,
        method: VerificationMethod,
        security_id: Optional[str],
        not_found_message: str,
        client: Optional[ClientInfo],
    ) -> VerificationResult:
        column, credential = lookup
        client = client or ClientInfo()
        try:
            verifier_id = await self.resolve_verifier(security_id)

            stmt = (
                select(JobSeeker, User.name, User.email)
                .outerjoin(User, User.id == JobSeeker.user_id)
                .where(column == credential)
            )
            row = (await self.session.execute(stmt)).first()
            if row is None:
                return VerificationResult.failed(VerificationFailure.NOT_FOUND, not_found_message)
            seeker, name, email = row

            # A successful verification grants access.
            if seeker.registration_status != RegistrationStatus.APPROVED.value:
                seeker.registration_status = RegistrationStatus.APPROVED.value
                await self.repos.job_seekers.update(seeker)

            existing = await self.repos.attendance.latest_check_in(seeker.id)

            event = await self.repos.events.get_active()
            if event is None:
                return VerificationResult.failed(VerificationFailure.NO_ACTIVE_EVENT, NO_ACTIVE_EVENT)

            already_checked_in = existing is not None
            record = AttendanceRecord(
                job_seeker_id=seeker.id,
                event_id=event.id,
                verified_by=verifier_id,
                verification_method=method.value,
                verification_data=credential,
                status=AttendanceStatus.CHECKED_IN.value,
                notes=DUPLICATE_NOTE if already_checked_in else None,
                ip_address=client.ip_address,
                device_info=client.user_agent,
            )
            await self.repos.attendance.create(record)
        except Exception as e:
            logger.error(f"{method.value} verification error: {e}", exc_info=True)
            await self.session.rollback()
            return VerificationResult.failed(VerificationFailure.SYSTEM_ERROR, SYSTEM_ERROR)

        log_check_in(seeker.id, event.id, method.value, already_checked_in, verifier_id)
        if self.cached is not None:
            await self.cached.invalidate_attendance()
            await self.cached.invalidate_job_seeker(seeker.id, seeker.user_id)

        return VerificationResult(
            success=True,
            message=ALREADY_CHECKED_IN if already_checked_in else CHECKED_IN,
            attendee=AttendeeInfo(
                id=seeker.id,
                name=name,
                email=email,
                pin=seeker.pin,
                ticket_number=seeker.ticket_number,
                registration_status=seeker.registration_status,
                check_in_time=existing.check_in_time if existing is not None else None,
                already_checked_in=already_checked_in,
            ),
        )

    async def get_attendance_history(self, event_id: Optional[str] = None, limit: int = 50) -> List[AttendanceHistoryItem]:
        """Recent attendance records with the attendee name, newest first."""
        stmt = (
            select(AttendanceRecord, User.name)
            .outerjoin(JobSeeker, JobSeeker.id == AttendanceRecord.job_seeker_id)
            .outerjoin(User, User.id == JobSeeker.user_id)
            .order_by(AttendanceRecord.check_in_time.desc())
            .limit(limit)
        )
        if event_id:
            stmt = stmt.where(AttendanceRecord.event_id == event_id)
        result = await self.session.execute(stmt)
        return [
            AttendanceHistoryItem(
                id=record.id,
                job_seeker_id=record.job_seeker_id,
                attendee_name=name,
                event_id=record.event_id,
                verified_by=record.verified_by,
                check_in_time=record.check_in_time,
                verification_method=record.verification_method,
                status=record.status,
                notes=record.notes,
            )
            for record, name in result.all()
        ]

    async def get_security_stats(self, security_id: Optional[str]) -> SecurityStats:
        """Today's check-ins overall and by this verifier, plus open incidents."""
        today_start = datetime.combine(utc_now().date(), time.min)
        verifier_id = await self.resolve_verifier(security_id)
        today = await self.repos.attendance.count_since(today_start)
        mine = await self.repos.attendance.count_since(today_start, verified_by=verifier_id) if verifier_id else 0
        open_incidents = await self.repos.incidents.count({"status": IncidentStatus.OPEN.value})
        return SecurityStats(today_check_ins=today, my_check_ins=mine, open_incidents=open_incidents)
