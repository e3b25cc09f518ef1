"""
Admin booth management.

Admins set booths up on behalf of companies, which are looked up by the
email address of their user account. A booth may also be created without a
company and handed to one later; such booths stay inactive until assigned.
Booth numbers are unique within an event.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.cache import CacheKeys, CacheManager
from jobfair_hub.core.database.entities import Booth, Employer, Event
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.admin import AdminBoothCreate, AdminBoothUpdate, UnassignedBoothCreate
from jobfair_hub.server.core.security import CurrentUser

from .audit import AuditService
from .errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

BOOTH_SIZES = ("small", "medium", "large")


class AdminBoothService:
    """Booth set-up, editing and company assignment for admins."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.cache = cache
        self.audit = AuditService(session)

    async def _booth(self, booth_id: str) -> Booth:
        booth = await self.repos.booths.get_by_id(booth_id)
        if booth is None:
            raise NotFoundError("Booth not found")
        return booth

    async def _employer_by_email(self, email: str) -> Employer:
        """Find the company profile of the user registered under ``email``.

        Raises:
            NotFoundError: No user has the email
            InvalidInputError: The user never completed a company profile
        """
        user = await self.repos.users.get_by_email(email.strip())
        if user is None:
            raise NotFoundError(
                f"No user found with email: {email}. Please ensure the company user is registered in the system first."
            )
        employer = await self.repos.employers.get_by_user_id(user.id)
        if employer is None:
            raise InvalidInputError(
                f"User with email {email} exists but has no employer profile. "
                "Please ask them to complete their company registration first."
            )
        return employer

    async def _check_booth_number(self, event_id: str, booth_number: str, exclude_id: Optional[str] = None) -> None:
        if await self.repos.booths.get_by_number(event_id, booth_number, exclude_id=exclude_id) is not None:
            raise ConflictError(f"Booth number {booth_number} already exists for this event")

    @staticmethod
    def _check_size(size: Optional[str]) -> None:
        if size is not None and size not in BOOTH_SIZES:
            raise InvalidInputError(f"Invalid booth size: {size}")

    async def _changed(self, admin: CurrentUser, action: str, booth: Booth, **details: Any) -> None:
        await self.audit.log_system_action(
            admin.id, action, "booth", booth.id, details={"booth_number": booth.booth_number, **details}
        )
        await self.cache.invalidate_pattern(CacheKeys.BOOTHS)

    async def list_booths(self, event_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Every booth with its company name and event name, by booth number."""
        stmt = (
            select(Booth, Employer.company_name, Event.name)
            .outerjoin(Employer, Employer.id == Booth.employer_id)
            .outerjoin(Event, Event.id == Booth.event_id)
            .order_by(Booth.booth_number)
        )
        if event_id:
            stmt = stmt.where(Booth.event_id == event_id)
        result = await self.session.execute(stmt)
        return [
            {**booth.model_dump(mode="json"), "company_name": company_name, "event_name": event_name}
            for booth, company_name, event_name in result.all()
        ]

    async def create_booth(self, admin: CurrentUser, data: AdminBoothCreate) -> ActionResult:
        """Create a booth for the company registered under ``data.employer_email``.

        Raises:
            NotFoundError: The event or the company user does not exist
            InvalidInputError: The user has no company profile, or the size is unknown
            ConflictError: The booth number is taken in the event
        """
        self._check_size(data.size)
        if await self.repos.events.get_by_id(data.event_id) is None:
            raise NotFoundError("Event not found")
        employer = await self._employer_by_email(data.employer_email)
        await self._check_booth_number(data.event_id, data.booth_number)

        booth = await self.repos.booths.create(
            Booth(employer_id=employer.id, is_active=True, **data.model_dump(exclude={"employer_email"}))
        )
        logger.info(f"Booth {booth.booth_number} created for employer {employer.id} by {admin.id}")
        await self._changed(admin, "create_booth", booth, employer_id=employer.id, event_id=booth.event_id)
        return ActionResult.ok("Booth created successfully", {"booth_id": booth.id})

    async def create_unassigned_booth(self, admin: CurrentUser, data: UnassignedBoothCreate) -> ActionResult:
        """Create an inactive booth with no company yet."""
        self._check_size(data.size)
        if await self.repos.events.get_by_id(data.event_id) is None:
            raise NotFoundError("Event not found")
        await self._check_booth_number(data.event_id, data.booth_number)

        booth = await self.repos.booths.create(Booth(employer_id=None, is_active=False, **data.model_dump()))
        await self._changed(admin, "create_unassigned_booth", booth, event_id=booth.event_id)
        return ActionResult.ok(
            "Unassigned booth created successfully. You can assign it to a company later.", {"booth_id": booth.id}
        )

    async def update_booth(self, admin: CurrentUser, booth_id: str, data: AdminBoothUpdate) -> ActionResult:
        """Edit a booth; an ``employer_email`` moves the booth to that company."""
        booth = await self._booth(booth_id)
        changes = data.model_dump(exclude_unset=True)
        self._check_size(changes.get("size"))

        email = changes.pop("employer_email", None)
        if email:
            user = await self.repos.users.get_by_email(email.strip())
            employer = await self.repos.employers.get_by_user_id(user.id) if user is not None else None
            if employer is None:
                raise NotFoundError(f"No employer found with email: {email}")
            booth.employer_id = employer.id
        if changes.get("booth_number") and changes["booth_number"] != booth.booth_number:
            await self._check_booth_number(booth.event_id, changes["booth_number"], exclude_id=booth.id)
        for key, value in changes.items():
            setattr(booth, key, value)

        booth = await self.repos.booths.update(booth)
        await self._changed(admin, "update_booth", booth, fields=sorted(data.model_dump(exclude_unset=True)))
        return ActionResult.ok("Booth updated successfully", booth.model_dump(mode="json"))

    async def delete_booth(self, admin: CurrentUser, booth_id: str) -> ActionResult:
        booth = await self._booth(booth_id)
        await self.repos.booths.delete(booth.id)
        await self._changed(admin, "delete_booth", booth)
        return ActionResult.ok("Booth deleted successfully")

    async def toggle_booth_status(self, admin: CurrentUser, booth_id: str) -> ActionResult:
        booth = await self._booth(booth_id)
        booth.is_active = not booth.is_active
        booth = await self.repos.booths.update(booth)

        state = "activated" if booth.is_active else "deactivated"
        await self._changed(admin, "toggle_booth_status", booth, is_active=booth.is_active)
        return ActionResult.ok(f"Booth {state} successfully", {"is_active": booth.is_active})

    async def assign_booth_to_employer(self, admin: CurrentUser, booth_id: str, employer_email: str) -> ActionResult:
        """Hand a booth to a company and activate it."""
        booth = await self._booth(booth_id)
        employer = await self._employer_by_email(employer_email)

        booth.employer_id = employer.id
        booth.is_active = True
        booth = await self.repos.booths.update(booth)
        await self._changed(admin, "assign_booth", booth, employer_id=employer.id)
        return ActionResult.ok(f"Booth successfully assigned to {employer.company_name}", {"booth_id": booth.id})
