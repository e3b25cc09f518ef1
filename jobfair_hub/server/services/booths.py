"""
Booth and interview slot service.

Employers manage the booth of their company and the interview slots at
it. Admins may manage slots at any booth but create booths through the
admin back-office instead.
"""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.cache import CacheKeys, CacheManager
from jobfair_hub.core.database.entities import Booth, Employer, Event, InterviewSlot
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.employers import (
    BoothInput,
    InterviewSlotCreate,
    InterviewSlotUpdate,
    SlotSearch,
)
from jobfair_hub.server.core.security import CurrentUser

from .errors import ConflictError, InvalidInputError, NotFoundError, PermissionDeniedError
from .jobs import get_employer_job

logger = logging.getLogger(__name__)

SLOT_CONFLICT = "Time slot conflicts with existing interview slot"


class BoothService:
    """Employer booths and their interview slots."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.cache = cache

    async def _employer_for(self, user: CurrentUser) -> Employer:
        employer = await self.repos.employers.get_by_user_id(user.id)
        if employer is None:
            raise NotFoundError("Employer profile not found. Please complete your company registration first.")
        return employer

    async def _owned_slot(self, user: CurrentUser, slot_id: str) -> InterviewSlot:
        """Load a slot the caller may manage."""
        slot = await self.repos.interview_slots.get_by_id(slot_id)
        if slot is None:
            raise NotFoundError("Interview slot not found or access denied")
        if user.is_admin:
            return slot
        employer = await self._employer_for(user)
        booth = await self.repos.booths.get_by_id(slot.booth_id)
        if booth is None or booth.employer_id != employer.id:
            raise NotFoundError("Interview slot not found or access denied")
        return slot

    async def create_or_update_booth(self, user: CurrentUser, data: BoothInput) -> ActionResult:
        """Create the employer's booth for an event, or update it if it exists."""
        if user.is_admin:
            raise PermissionDeniedError("Admins should use the admin booth management")
        employer = await self._employer_for(user)
        if await self.repos.events.get_by_id(data.event_id) is None:
            raise NotFoundError("Event not found")

        booth = await self.repos.booths.get_by_employer_and_event(employer.id, data.event_id)
        if booth is not None:
            for key, value in data.model_dump(exclude={"event_id"}).items():
                setattr(booth, key, value)
            booth = await self.repos.booths.update(booth)
            message = "Booth updated successfully"
        else:
            booth = await self.repos.booths.create(Booth(employer_id=employer.id, **data.model_dump()))
            message = "Booth created successfully"

        await self.cache.invalidate_pattern(CacheKeys.BOOTHS)
        return ActionResult.ok(message, booth.model_dump(mode="json"))

    async def get_employer_booth(self, user: CurrentUser, event_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """The caller's booth with its event; for admins, the first booth found."""
        stmt = select(Booth, Event).outerjoin(Event, Event.id == Booth.event_id)
        if not user.is_admin:
            employer = await self.repos.employers.get_by_user_id(user.id)
            if employer is None:
                return None
            stmt = stmt.where(Booth.employer_id == employer.id)
        if event_id:
            stmt = stmt.where(Booth.event_id == event_id)
        row = (await self.session.execute(stmt.limit(1))).first()
        if row is None:
            return None
        booth, event = row
        return {
            "booth": booth.model_dump(mode="json"),
            "event": event.model_dump(mode="json") if event is not None else None,
        }

    async def create_interview_slot(self, user: CurrentUser, data: InterviewSlotCreate) -> ActionResult:
        booth = await self.repos.booths.get_by_id(data.booth_id)
        if booth is None:
            raise NotFoundError("Booth not found")
        if not user.is_admin:
            employer = await self._employer_for(user)
            if booth.employer_id != employer.id:
                raise NotFoundError("Booth not found or access denied")

        if data.job_id is not None:
            await get_employer_job(self.session, booth.employer_id, data.job_id)

        end_time = data.start_time + timedelta(minutes=data.duration)
        if await self.repos.interview_slots.find_overlapping(booth.id, data.start_time, end_time) is not None:
            raise ConflictError(SLOT_CONFLICT)

        slot = InterviewSlot(
            booth_id=booth.id,
            job_id=data.job_id,
            start_time=data.start_time,
            end_time=end_time,
            duration=data.duration,
            interviewer_name=data.interviewer_name,
            notes=data.notes,
        )
        slot = await self.repos.interview_slots.create(slot)
        await self.cache.invalidate_pattern(CacheKeys.INTERVIEWS)
        return ActionResult.ok("Interview slot created successfully", slot.model_dump(mode="json"))

    async def update_interview_slot(self, user: CurrentUser, slot_id: str, data: InterviewSlotUpdate) -> ActionResult:
        slot = await self._owned_slot(user, slot_id)
        if slot.is_booked:
            raise ConflictError("Cannot update a booked interview slot")

        changes = data.model_dump(exclude_unset=True)
        start_time = changes.get("start_time") or slot.start_time
        duration = changes.get("duration") or slot.duration
        end_time = start_time + timedelta(minutes=duration)
        if (start_time, end_time) != (slot.start_time, slot.end_time):
            clash = await self.repos.interview_slots.find_overlapping(slot.booth_id, start_time, end_time, exclude_id=slot.id)
            if clash is not None:
                raise ConflictError(SLOT_CONFLICT)

        slot.start_time = start_time
        slot.duration = duration
        slot.end_time = end_time
        if "interviewer_name" in changes:
            slot.interviewer_name = changes["interviewer_name"]
        if "notes" in changes:
            slot.notes = changes["notes"]
        slot = await self.repos.interview_slots.update(slot)
        await self.cache.invalidate_pattern(CacheKeys.INTERVIEWS)
        return ActionResult.ok("Interview slot updated successfully", slot.model_dump(mode="json"))

    async def delete_interview_slot(self, user: CurrentUser, slot_id: str) -> ActionResult:
        slot = await self._owned_slot(user, slot_id)
        if slot.is_booked:
            raise ConflictError("Cannot delete a booked interview slot. Please cancel the booking first.")
        await self.repos.interview_slots.delete(slot.id)
        await self.cache.invalidate_pattern(CacheKeys.INTERVIEWS)
        return ActionResult.ok("Interview slot deleted successfully")

    async def bulk_delete_interview_slots(self, user: CurrentUser, slot_ids: List[str]) -> ActionResult:
        """Delete several slots, skipping booked or foreign ones.

        Returns:
            ``ActionResult`` whose data lists the deleted ids and per-slot errors
        """
        if not slot_ids:
            raise InvalidInputError("No slots selected for deletion")

        deleted: List[str] = []
        errors: List[str] = []
        for slot_id in slot_ids:
            try:
                await self.delete_interview_slot(user, slot_id)
            except (NotFoundError, ConflictError) as e:
                errors.append(f"{slot_id}: {e.message}")
            else:
                deleted.append(slot_id)

        data = {"deleted": deleted, "failed": len(errors), "errors": errors}
        if not errors:
            return ActionResult.ok(f"Successfully deleted {len(deleted)} interview slots!", data)
        return ActionResult(
            success=bool(deleted),
            message=f"Deleted {len(deleted)} out of {len(slot_ids)} slots. {len(errors)} failed.",
            data=data,
        )

    async def search_interview_slots(self, user: CurrentUser, filters: SlotSearch) -> List[Dict[str, Any]]:
        """Slots visible to the caller matching ``filters``, ordered by start time."""
        stmt = select(InterviewSlot, Booth).join(Booth, Booth.id == InterviewSlot.booth_id)
        if not user.is_admin:
            employer = await self._employer_for(user)
            stmt = stmt.where(Booth.employer_id == employer.id)
        if filters.booth_id:
            stmt = stmt.where(InterviewSlot.booth_id == filters.booth_id)
        if filters.status == "available":
            stmt = stmt.where(InterviewSlot.is_booked == False)  # noqa: E712
        elif filters.status == "booked":
            stmt = stmt.where(InterviewSlot.is_booked == True)  # noqa: E712
        if filters.date_from:
            stmt = stmt.where(InterviewSlot.start_time >= filters.date_from)
        if filters.date_to:
            end_of_day = datetime.combine(filters.date_to.date(), time.max)
            stmt = stmt.where(InterviewSlot.start_time <= end_of_day)
        if filters.interviewer:
            stmt = stmt.where(InterviewSlot.interviewer_name.ilike(f"%{filters.interviewer}%"))

        result = await self.session.execute(stmt.order_by(InterviewSlot.start_time))
        return [
            {**slot.model_dump(mode="json"), "booth_number": booth.booth_number, "booth_location": booth.location}
            for slot, booth in result.all()
        ]
