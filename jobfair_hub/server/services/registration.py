"""
Job seeker registration service.

Creating a profile issues the attendee's check-in credentials: a unique
6-digit PIN valid for 24 hours and a unique ticket number.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Awaitable, Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.core.cache import CacheManager
from jobfair_hub.core.credentials import generate_secure_pin, generate_ticket_number
from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import (
    JobSeeker,
    NotificationType,
    RegistrationStatus,
    UserRole,
)
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.registration import (
    JobSeekerProfileCreate,
    JobSeekerProfileUpdate,
    JobSeekerRead,
    PinCheckResult,
    UserProfileRead,
    UserRead,
)

from .audit import AuditService
from .cached_queries import CachedQueries
from .errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

PIN_VALIDITY = timedelta(hours=24)
MAX_CODE_ATTEMPTS = 10


async def _unique_code(generate: Callable[[], str], exists: Callable[[str], Awaitable[bool]], label: str) -> str:
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate()
        if not await exists(code):
            return code
    raise ConflictError(f"Could not allocate a unique {label}. Please try again.")


class RegistrationService:
    """Job seeker profiles and their check-in credentials."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.cached = CachedQueries(session, cache)
        self.audit = AuditService(session)

    async def create_job_seeker_profile(self, user_id: str, data: JobSeekerProfileCreate) -> ActionResult:
        """Create the caller's job seeker profile.

        Raises:
            NotFoundError: The user does not exist
            ConflictError: A profile already exists, or no unique code could be drawn
        """
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if await self.repos.job_seekers.get_by_user_id(user_id) is not None:
            raise ConflictError("Profile already exists for this user")

        pin = await _unique_code(generate_secure_pin, self.repos.job_seekers.pin_exists, "PIN")
        ticket_number = await _unique_code(
            generate_ticket_number, self.repos.job_seekers.ticket_number_exists, "ticket number"
        )
        now = utc_now()

        user.name = data.full_name
        user.phone_number = data.phone_number
        user.role = UserRole.JOB_SEEKER.value
        user.updated_at = now
        self.session.add(user)

        seeker = JobSeeker(
            user_id=user_id,
            bio=data.bio,
            cv_url=data.cv_url,
            skills=data.skills,
            experience=data.experience,
            education=data.education,
            pin=pin,
            ticket_number=ticket_number,
            registration_status=RegistrationStatus.PENDING.value,
            interest_categories=data.interest_categories,
            linkedin_url=data.linkedin_url or None,
            portfolio_url=data.portfolio_url or None,
            pin_generated_at=now,
            pin_expires_at=now + PIN_VALIDITY,
        )
        self.session.add(seeker)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Job seeker profile for {user_id} hit a uniqueness conflict: {e}")
            raise ConflictError("Failed to create profile. Please try again.") from e

        logger.info(f"Created job seeker profile {seeker.id} for user {user_id}")
        await self.audit.notify(
            user_id,
            title="Registration received",
            message=f"Your ticket number is {ticket_number}. Show your PIN at the entrance to check in.",
            type=NotificationType.SUCCESS,
            action_url="/dashboard",
        )
        await self.cached.invalidate_user(user_id, user.email)
        await self.cached.invalidate_job_seeker(seeker.id, user_id)

        return ActionResult.ok("Profile created successfully", {"pin": pin, "ticket_number": ticket_number})

    async def get_user_profile(self, user_id: str) -> UserProfileRead:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        seeker = await self.repos.job_seekers.get_by_user_id(user_id)
        return UserProfileRead(
            user=UserRead.model_validate(user),
            job_seeker=JobSeekerRead.model_validate(seeker) if seeker is not None else None,
        )

    async def update_job_seeker_profile(self, user_id: str, updates: JobSeekerProfileUpdate) -> ActionResult:
        user = await self.repos.users.get_by_id(user_id)
        seeker = await self.repos.job_seekers.get_by_user_id(user_id)
        if user is None or seeker is None:
            raise NotFoundError("Job seeker profile not found")

        changes = updates.model_dump(exclude_unset=True)
        now = utc_now()
        if changes.get("full_name"):
            user.name = changes.pop("full_name")
        if changes.get("phone_number"):
            user.phone_number = changes.pop("phone_number")
        user.updated_at = now
        self.session.add(user)

        for field in ("linkedin_url", "portfolio_url"):
            if field in changes:
                setattr(seeker, field, changes.pop(field) or None)
        for field, value in changes.items():
            if value is not None and hasattr(seeker, field):
                setattr(seeker, field, value)
        seeker.updated_at = now
        self.session.add(seeker)
        await self.session.commit()

        await self.cached.invalidate_user(user_id, user.email)
        await self.cached.invalidate_job_seeker(seeker.id, user_id)
        return ActionResult.ok("Profile updated successfully")

    async def regenerate_pin(self, user_id: str) -> ActionResult:
        seeker = await self.repos.job_seekers.get_by_user_id(user_id)
        if seeker is None:
            raise NotFoundError("Job seeker profile not found")

        now = utc_now()
        seeker.pin = await _unique_code(generate_secure_pin, self.repos.job_seekers.pin_exists, "PIN")
        seeker.pin_generated_at = now
        seeker.pin_expires_at = now + PIN_VALIDITY
        await self.repos.job_seekers.update(seeker)

        await self.cached.invalidate_job_seeker(seeker.id, user_id)
        return ActionResult.ok("New PIN generated successfully", {"pin": seeker.pin})

    async def verify_pin(self, ticket_number: str, pin: str) -> PinCheckResult:
        """Check a ticket and PIN pair; a valid, unexpired pair approves the registration."""
        seeker: Optional[JobSeeker] = await self.repos.job_seekers.get_by_ticket_number(ticket_number)
        if seeker is None or seeker.pin != pin:
            return PinCheckResult(valid=False, message="Invalid ticket number or PIN")

        if seeker.pin_expires_at is not None and utc_now() > seeker.pin_expires_at:
            return PinCheckResult(valid=False, message="PIN has expired. Please request a new one.", expired=True)

        seeker.registration_status = RegistrationStatus.APPROVED.value
        await self.repos.job_seekers.update(seeker)
        await self.cached.invalidate_job_seeker(seeker.id, seeker.user_id)
        return PinCheckResult(
            valid=True,
            message="PIN verified successfully",
            job_seeker_id=seeker.id,
            ticket_number=seeker.ticket_number,
        )
