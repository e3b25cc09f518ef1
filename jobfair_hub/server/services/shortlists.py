"""
Shortlist and candidate interaction service.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.database.entities import (
    DEFAULT_LIST_NAME,
    CandidateInteraction,
    Employer,
    InteractionType,
    JobSeeker,
    NotificationType,
    Shortlist,
    ShortlistPriority,
    ShortlistStatus,
    User,
)
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.employers import (
    InteractionCreate,
    ShortlistCreate,
    ShortlistEntryRead,
)
from jobfair_hub.server.core.security import CurrentUser

from .audit import AuditService
from .errors import ConflictError, InvalidInputError, NotFoundError
from .jobs import get_employer_job

logger = logging.getLogger(__name__)


def _choice(value: Optional[str], allowed: type, default: str, label: str) -> str:
    if value is None:
        return default
    if value not in {member.value for member in allowed}:
        raise InvalidInputError(f"Invalid {label}: {value}")
    return value


class ShortlistService:
    """Employer shortlists of candidates and the interaction log."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.audit = AuditService(session)

    async def _employer_for(self, user: CurrentUser) -> Employer:
        employer = await self.repos.employers.get_by_user_id(user.id)
        if employer is None:
            raise NotFoundError("Employer profile not found")
        return employer

    async def _owned_entry(self, user: CurrentUser, shortlist_id: str) -> tuple[Employer, Shortlist]:
        employer = await self._employer_for(user)
        entry = await self.repos.shortlists.get_by_id(shortlist_id)
        if entry is None or entry.employer_id != employer.id:
            raise NotFoundError("Shortlist entry not found")
        return employer, entry

    async def _record_interaction(
        self,
        employer_id: str,
        job_seeker_id: str,
        interaction_type: InteractionType,
        performed_by: str,
        event_id: Optional[str] = None,
        notes: Optional[str] = None,
        **details,
    ) -> CandidateInteraction:
        interaction = CandidateInteraction(
            employer_id=employer_id,
            job_seeker_id=job_seeker_id,
            event_id=event_id,
            interaction_type=interaction_type.value,
            notes=notes,
            details=details,
            performed_by=performed_by,
        )
        return await self.repos.interactions.create(interaction)

    async def add_to_shortlist(self, user: CurrentUser, data: ShortlistCreate) -> ActionResult:
        """Add a candidate to one of the employer's shortlists.

        The candidate receives an in-app notification; a failed notification
        does not fail the operation.
        """
        employer = await self._employer_for(user)
        seeker = await self.repos.job_seekers.get_by_id(data.job_seeker_id)
        if seeker is None:
            raise NotFoundError("Candidate not found")
        if data.job_id is not None:
            await get_employer_job(self.session, employer.id, data.job_id)
        if await self.repos.shortlists.find_entry(employer.id, seeker.id, data.job_id) is not None:
            raise ConflictError("Candidate is already in this shortlist")

        entry = Shortlist(
            employer_id=employer.id,
            job_id=data.job_id,
            event_id=data.event_id,
            job_seeker_id=seeker.id,
            list_name=data.list_name or DEFAULT_LIST_NAME,
            status=_choice(data.status, ShortlistStatus, ShortlistStatus.INTERESTED.value, "status"),
            priority=_choice(data.priority, ShortlistPriority, ShortlistPriority.MEDIUM.value, "priority"),
            notes=data.notes,
            tags=data.tags,
            added_by=user.id,
        )
        entry = await self.repos.shortlists.create(entry)
        await self._record_interaction(
            employer.id,
            seeker.id,
            InteractionType.SHORTLISTED,
            user.id,
            event_id=data.event_id,
            list_name=entry.list_name,
            priority=entry.priority,
        )
        await self.audit.notify(
            seeker.user_id,
            title="You've been shortlisted",
            message=f"{employer.company_name} added you to a shortlist. Keep an eye out for interview invitations.",
            type=NotificationType.SUCCESS,
            details={"employer_id": employer.id, "shortlist_id": entry.id},
        )
        return ActionResult.ok("Candidate added to shortlist successfully", entry.model_dump(mode="json"))

    async def remove_from_shortlist(self, user: CurrentUser, shortlist_id: str) -> ActionResult:
        _, entry = await self._owned_entry(user, shortlist_id)
        await self.repos.shortlists.delete(entry.id)
        return ActionResult.ok("Candidate removed from shortlist")

    async def update_shortlist_status(self, user: CurrentUser, shortlist_id: str, status: str) -> ActionResult:
        _, entry = await self._owned_entry(user, shortlist_id)
        entry.status = _choice(status, ShortlistStatus, entry.status, "status")
        await self.repos.shortlists.update(entry)
        return ActionResult.ok("Status updated successfully", entry.model_dump(mode="json"))

    async def update_shortlist_notes(self, user: CurrentUser, shortlist_id: str, notes: str) -> ActionResult:
        employer, entry = await self._owned_entry(user, shortlist_id)
        entry.notes = notes
        await self.repos.shortlists.update(entry)
        await self._record_interaction(
            employer.id, entry.job_seeker_id, InteractionType.NOTE_ADDED, user.id, event_id=entry.event_id, notes=notes
        )
        return ActionResult.ok("Notes updated successfully", entry.model_dump(mode="json"))

    async def get_employer_shortlists(self, user: CurrentUser, list_name: Optional[str] = None) -> List[ShortlistEntryRead]:
        employer = await self._employer_for(user)
        stmt = (
            select(Shortlist, User.name, User.email)
            .outerjoin(JobSeeker, JobSeeker.id == Shortlist.job_seeker_id)
            .outerjoin(User, User.id == JobSeeker.user_id)
            .where(Shortlist.employer_id == employer.id)
            .order_by(Shortlist.created_at.desc())
        )
        if list_name:
            stmt = stmt.where(Shortlist.list_name == list_name)
        result = await self.session.execute(stmt)
        return [
            ShortlistEntryRead(
                id=entry.id,
                job_seeker_id=entry.job_seeker_id,
                candidate_name=name,
                candidate_email=email,
                job_id=entry.job_id,
                list_name=entry.list_name,
                status=entry.status,
                priority=entry.priority,
                notes=entry.notes,
                tags=entry.tags or [],
                created_at=entry.created_at,
            )
            for entry, name, email in result.all()
        ]

    async def log_candidate_interaction(self, user: CurrentUser, data: InteractionCreate) -> ActionResult:
        employer = await self._employer_for(user)
        try:
            interaction_type = InteractionType(data.interaction_type)
        except ValueError as e:
            raise InvalidInputError(f"Invalid interaction type: {data.interaction_type}") from e

        interaction = CandidateInteraction(
            employer_id=employer.id,
            job_seeker_id=data.job_seeker_id,
            event_id=data.event_id,
            interaction_type=interaction_type.value,
            duration=data.duration,
            notes=data.notes,
            rating=data.rating,
            details=data.details,
            performed_by=user.id,
        )
        interaction = await self.repos.interactions.create(interaction)
        return ActionResult.ok("Interaction logged successfully", interaction.model_dump(mode="json"))
