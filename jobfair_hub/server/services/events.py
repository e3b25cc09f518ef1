"""
Event and checkpoint administration.

Only one event is active at a time: activating or creating an active event
deactivates every other one. Job fairs are created with a default set of
checkpoints sized from the expected attendance.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.cache import CacheManager
from jobfair_hub.core.database.entities import (
    AttendanceRecord,
    Booth,
    Checkpoint,
    CheckpointType,
    Event,
    EventType,
    JobSeeker,
    SecurityIncident,
)
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.events import EventCreate, EventUpdate
from jobfair_hub.server.core.config import settings
from jobfair_hub.server.core.security import CurrentUser

from .audit import AuditService
from .cached_queries import CachedQueries
from .errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

DUPLICATE_OFFSET = timedelta(weeks=1)


@dataclass(frozen=True)
class CheckpointTemplate:
    suffix: str
    name: str
    location: str
    checkpoint_type: CheckpointType
    share: float
    cap: Optional[int]
    requires_verification: bool

    def capacity(self, max_attendees: int) -> int:
        sized = int(max_attendees * self.share)
        return min(self.cap, sized) if self.cap is not None else sized


DEFAULT_CHECKPOINTS = (
    CheckpointTemplate("main_entrance", "Main Entrance", "Building Main Floor", CheckpointType.ENTRY, 0.2, 200, True),
    CheckpointTemplate("registration", "Registration Desk", "Lobby Area", CheckpointType.REGISTRATION, 0.1, 100, True),
    CheckpointTemplate("main_hall", "Main Event Hall", "Central Area", CheckpointType.MAIN_HALL, 0.6, None, False),
    CheckpointTemplate("networking", "Networking Area", "Side Hall", CheckpointType.BOOTH_AREA, 0.3, None, False),
)


def _slug(name: str) -> str:
    return re.sub(r"\s+", "_", name.strip().lower())


def _check_dates(event: Event) -> None:
    if event.end_date <= event.start_date:
        raise InvalidInputError("End date must be after start date")
    if event.registration_deadline is not None and event.registration_deadline >= event.start_date:
        raise InvalidInputError("Registration deadline must be before event start date")


class EventService:
    """Admin event management."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.cached = CachedQueries(session, cache)
        self.audit = AuditService(session)

    async def _get(self, event_id: str, message: str = "Event not found") -> Event:
        event = await self.repos.events.get_by_id(event_id)
        if event is None:
            raise NotFoundError(message)
        return event

    async def _count(self, model, *criteria) -> int:
        result = await self.session.execute(select(func.count()).select_from(model).where(*criteria))
        return int(result.scalar_one())

    async def create_event(self, admin: CurrentUser, data: EventCreate) -> ActionResult:
        """Create an event; a job fair also gets its default checkpoints.

        Raises:
            InvalidInputError: The dates are out of order or the type is unknown
        """
        if data.event_type not in {member.value for member in EventType}:
            raise InvalidInputError(f"Invalid event type: {data.event_type}")
        event = Event(**data.model_dump(), created_by=admin.id)
        _check_dates(event)

        if event.is_active:
            await self.repos.events.deactivate_all()
        await self.repos.events.add(event)

        checkpoints: List[Checkpoint] = []
        if event.event_type == EventType.JOB_FAIR.value:
            max_attendees = event.max_attendees or settings.event.default_capacity
            for template in DEFAULT_CHECKPOINTS:
                checkpoint = Checkpoint(
                    id=f"{event.id}_{template.suffix}",
                    event_id=event.id,
                    name=template.name,
                    location=template.location,
                    checkpoint_type=template.checkpoint_type.value,
                    max_capacity=template.capacity(max_attendees),
                    requires_verification=template.requires_verification,
                )
                await self.repos.checkpoints.add(checkpoint)
                checkpoints.append(checkpoint)
        await self.session.commit()
        await self.session.refresh(event)

        logger.info(f"Event {event.id} created by {admin.id} with {len(checkpoints)} checkpoints")
        await self.audit.log_system_action(
            admin.id,
            "create_event",
            "event",
            event.id,
            details={
                "event_name": event.name,
                "event_type": event.event_type,
                "max_attendees": event.max_attendees,
                "venue": event.venue,
                "checkpoints_created": len(checkpoints),
            },
        )
        await self.cached.invalidate_events()
        return ActionResult.ok("Event created successfully", {"event_id": event.id})

    async def update_event(self, admin: CurrentUser, event_id: str, data: EventUpdate) -> ActionResult:
        event = await self._get(event_id)
        changes = data.model_dump(exclude_unset=True)
        if "event_type" in changes and changes["event_type"] not in {member.value for member in EventType}:
            raise InvalidInputError(f"Invalid event type: {changes['event_type']}")
        for key, value in changes.items():
            setattr(event, key, value)
        _check_dates(event)
        await self.repos.events.update(event)

        await self.audit.log_system_action(
            admin.id, "update_event", "event", event.id, details={"fields": sorted(changes)}
        )
        await self.cached.invalidate_events()
        return ActionResult.ok("Event updated successfully")

    async def delete_event(self, admin: CurrentUser, event_id: str) -> ActionResult:
        """Delete an event and its checkpoints.

        Raises:
            ConflictError: Attendance or booths are recorded against the event
        """
        event = await self._get(event_id)
        attendance = await self._count(AttendanceRecord, AttendanceRecord.event_id == event_id)
        booths = await self._count(Booth, Booth.event_id == event_id)
        if attendance or booths:
            raise ConflictError(
                "Cannot delete event with recorded attendance or booths. Please remove them first."
            )

        for checkpoint in await self.repos.checkpoints.list_by_event(event_id):
            await self.session.delete(checkpoint)
        await self.session.delete(event)
        await self.session.commit()

        await self.audit.log_system_action(
            admin.id, "delete_event", "event", event_id, details={"event_name": event.name}
        )
        await self.cached.invalidate_events()
        return ActionResult.ok("Event deleted successfully")

    async def toggle_event_status(self, admin: CurrentUser, event_id: str) -> ActionResult:
        event = await self._get(event_id)
        event.is_active = not event.is_active
        if event.is_active:
            await self.repos.events.deactivate_all(except_id=event.id)
        await self.repos.events.update(event)

        state = "activated" if event.is_active else "deactivated"
        await self.audit.log_system_action(
            admin.id, "toggle_event_status", "event", event.id, details={"is_active": event.is_active}
        )
        await self.cached.invalidate_events()
        return ActionResult.ok(f"Event {state} successfully", {"is_active": event.is_active})

    async def get_event_stats(self, event_id: str) -> Dict[str, int]:
        await self._get(event_id)
        return {
            "attendance": await self._count(AttendanceRecord, AttendanceRecord.event_id == event_id),
            "booths": await self._count(Booth, Booth.event_id == event_id),
            "checkpoints": await self._count(Checkpoint, Checkpoint.event_id == event_id),
            "incidents": await self._count(SecurityIncident, SecurityIncident.event_id == event_id),
        }

    async def duplicate_event(self, admin: CurrentUser, event_id: str, new_name: str) -> ActionResult:
        """Copy an event one week later, inactive, with its checkpoints."""
        original = await self._get(event_id, "Original event not found")
        start_date = original.start_date + DUPLICATE_OFFSET
        copy = Event(
            name=new_name,
            description=original.description,
            start_date=start_date,
            end_date=original.end_date + DUPLICATE_OFFSET,
            venue=original.venue,
            address=original.address,
            max_attendees=original.max_attendees,
            event_type=original.event_type,
            registration_deadline=(
                original.registration_deadline + DUPLICATE_OFFSET
                if original.registration_deadline is not None
                else start_date - timedelta(days=1)
            ),
            is_active=False,
            created_by=admin.id,
        )
        await self.repos.events.add(copy)

        checkpoints = await self.repos.checkpoints.list_by_event(original.id)
        for checkpoint in checkpoints:
            await self.repos.checkpoints.add(
                Checkpoint(
                    id=f"{copy.id}_{_slug(checkpoint.name)}",
                    event_id=copy.id,
                    name=checkpoint.name,
                    location=checkpoint.location,
                    checkpoint_type=checkpoint.checkpoint_type,
                    max_capacity=checkpoint.max_capacity,
                    requires_verification=checkpoint.requires_verification,
                )
            )
        await self.session.commit()

        await self.audit.log_system_action(
            admin.id,
            "duplicate_event",
            "event",
            copy.id,
            details={
                "original_event_id": original.id,
                "original_event_name": original.name,
                "new_event_name": new_name,
                "checkpoints_copied": len(checkpoints),
            },
        )
        await self.cached.invalidate_events()
        return ActionResult.ok("Event duplicated successfully", {"event_id": copy.id})

    async def get_current_event(self) -> Optional[Dict[str, Any]]:
        """The active event with registered and checked-in attendee counts."""
        event = await self.repos.events.get_active()
        if event is None:
            return None
        return {
            **event.model_dump(mode="json"),
            "current_attendees": await self._count(JobSeeker),
            "checked_in_attendees": await self._count(AttendanceRecord, AttendanceRecord.event_id == event.id),
        }

    async def list_events(self) -> List[Dict[str, Any]]:
        return await self.cached.get_all_events()

    async def list_checkpoints(self, event_id: str) -> List[Checkpoint]:
        await self._get(event_id)
        return await self.repos.checkpoints.list_by_event(event_id)
