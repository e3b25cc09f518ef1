"""
Admin assignment of approved job seekers to employer booths.

An assignment and the job seeker's ``assignment_status`` always change
together in one transaction; booking or freeing the interview slot is part
of the same commit.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.cache import CacheManager
from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import (
    AssignmentStatus,
    Booth,
    BoothAssignment,
    BoothAssignmentStatus,
    Employer,
    Event,
    InterviewSlot,
    JobSeeker,
    RegistrationStatus,
    User,
)
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.admin import (
    AssignmentSearch,
    BoothAssignmentCreate,
    BulkAssignmentCreate,
    UnassignedFilters,
)
from jobfair_hub.server.core.security import CurrentUser

from .cached_queries import CachedQueries
from .errors import ConflictError, InvalidInputError, JobFairError, NotFoundError

logger = logging.getLogger(__name__)

OPEN_STATUSES = (BoothAssignmentStatus.ASSIGNED.value, BoothAssignmentStatus.CONFIRMED.value)

#: Job seeker ``assignment_status`` implied by an assignment's status.
SEEKER_STATUS_FOR = {
    BoothAssignmentStatus.CANCELLED.value: AssignmentStatus.UNASSIGNED.value,
    BoothAssignmentStatus.CONFIRMED.value: AssignmentStatus.CONFIRMED.value,
    BoothAssignmentStatus.COMPLETED.value: AssignmentStatus.COMPLETED.value,
}


def _open_assignment_count():
    return (
        sa.select(func.count())
        .select_from(BoothAssignment)
        .where(BoothAssignment.booth_id == Booth.id, BoothAssignment.status.in_(OPEN_STATUSES))
        .correlate(Booth)
        .scalar_subquery()
    )


def _slot_count(available_only: bool = False):
    stmt = sa.select(func.count()).select_from(InterviewSlot).where(InterviewSlot.booth_id == Booth.id)
    if available_only:
        stmt = stmt.where(InterviewSlot.is_booked == False)  # noqa: E712
    return stmt.correlate(Booth).scalar_subquery()


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


class BoothAssignmentService:
    """Assign, track and release job seeker booth assignments."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.cached = CachedQueries(session, cache)

    async def get_unassigned_job_seekers(self, filters: UnassignedFilters) -> List[Dict[str, Any]]:
        """Approved, unassigned job seekers, highest priority and longest waiting first."""
        stmt = (
            select(JobSeeker, User)
            .outerjoin(User, User.id == JobSeeker.user_id)
            .where(
                JobSeeker.registration_status == RegistrationStatus.APPROVED.value,
                JobSeeker.assignment_status == AssignmentStatus.UNASSIGNED.value,
            )
            .order_by(JobSeeker.priority_level.desc(), JobSeeker.created_at.asc())
        )
        if filters.priority_level:
            stmt = stmt.where(JobSeeker.priority_level == filters.priority_level)
        rows = (await self.session.execute(stmt)).all()

        # Name, email, bio and the JSON skills column are matched in Python.
        if filters.search:
            needle = filters.search.lower()
            rows = [
                (seeker, user)
                for seeker, user in rows
                if (user is not None and (_contains(user.name, needle) or _contains(user.email, needle)))
                or _contains(seeker.bio, needle)
            ]
        if filters.skills:
            wanted = [skill.lower() for skill in filters.skills]
            rows = [
                (seeker, user)
                for seeker, user in rows
                if any(want in skill.lower() for skill in seeker.skills or [] for want in wanted)
            ]

        return [
            {
                "job_seeker": seeker.model_dump(mode="json"),
                "name": user.name if user is not None else None,
                "email": user.email if user is not None else None,
            }
            for seeker, user in rows
        ]

    async def get_available_booths(self) -> List[Dict[str, Any]]:
        assignment_count = _open_assignment_count().label("assignment_count")
        available_slots = _slot_count(available_only=True).label("available_slots")
        stmt = (
            select(Booth, Employer.company_name, Event.name, assignment_count, available_slots)
            .outerjoin(Employer, Employer.id == Booth.employer_id)
            .outerjoin(Event, Event.id == Booth.event_id)
            .where(Booth.is_active == True)  # noqa: E712
            .order_by(Booth.booth_number.asc())
        )
        result = await self.session.execute(stmt)
        return [
            {
                "booth": booth.model_dump(mode="json"),
                "company_name": company_name,
                "event_name": event_name,
                "assignment_count": int(assigned or 0),
                "available_slots": int(slots or 0),
            }
            for booth, company_name, event_name, assigned, slots in result.all()
        ]

    async def assign_job_seeker_to_booth(self, admin: CurrentUser, data: BoothAssignmentCreate) -> ActionResult:
        """Assign one approved job seeker to an active booth.

        Raises:
            NotFoundError: The seeker is missing or unapproved, or the booth is missing or inactive
            ConflictError: The seeker already holds an open assignment to the booth
        """
        seeker = await self.repos.job_seekers.get_by_id(data.job_seeker_id)
        if seeker is None or seeker.registration_status != RegistrationStatus.APPROVED.value:
            raise NotFoundError("Job seeker not found or not approved")
        booth = await self.repos.booths.get_by_id(data.booth_id)
        if booth is None or not booth.is_active or booth.employer_id is None:
            raise NotFoundError("Booth not found or inactive")
        if await self.repos.booth_assignments.find_open(seeker.id, booth.id) is not None:
            raise ConflictError("Job seeker is already assigned to this booth")

        slot: Optional[InterviewSlot] = None
        if data.interview_slot_id:
            slot = await self.repos.interview_slots.get_by_id(data.interview_slot_id)
            if slot is None or slot.booth_id != booth.id:
                raise NotFoundError("Interview slot not found at this booth")
            if slot.is_booked:
                raise ConflictError("Interview slot is already booked")

        try:
            assignment = BoothAssignment(
                job_seeker_id=seeker.id,
                booth_id=booth.id,
                interview_slot_id=slot.id if slot is not None else None,
                assigned_by=admin.id,
                status=BoothAssignmentStatus.ASSIGNED.value,
                interview_date=data.interview_date,
                interview_time=data.interview_time,
                notes=data.notes,
                priority=data.priority,
            )
            await self.repos.booth_assignments.add(assignment)
            seeker.assignment_status = AssignmentStatus.ASSIGNED.value
            seeker.updated_at = utc_now()
            self.session.add(seeker)
            if slot is not None:
                slot.is_booked = True
                slot.updated_at = utc_now()
                self.session.add(slot)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error(f"Failed to assign job seeker {seeker.id} to booth {booth.id}", exc_info=True)
            raise

        await self.cached.invalidate_job_seeker(seeker.id, seeker.user_id)
        logger.info(f"Job seeker {seeker.id} assigned to booth {booth.id} by {admin.id}")
        return ActionResult.ok("Job seeker assigned to booth successfully", {"assignment_id": assignment.id})

    async def bulk_assign(self, admin: CurrentUser, data: BulkAssignmentCreate) -> ActionResult:
        """Assign several job seekers to one booth, reporting each outcome."""
        outcomes: List[Dict[str, Any]] = []
        for job_seeker_id in data.job_seeker_ids:
            request = BoothAssignmentCreate(
                job_seeker_id=job_seeker_id,
                booth_id=data.booth_id,
                interview_date=data.interview_date,
                notes=data.notes,
                priority=data.priority,
            )
            try:
                result = await self.assign_job_seeker_to_booth(admin, request)
            except JobFairError as e:
                outcomes.append({"job_seeker_id": job_seeker_id, "success": False, "error": e.message})
            else:
                outcomes.append({"job_seeker_id": job_seeker_id, "success": True, **result.data})

        successful = sum(1 for outcome in outcomes if outcome["success"])
        failed = len(outcomes) - successful
        summary = {
            "successful": successful,
            "failed": failed,
            "errors": [outcome for outcome in outcomes if not outcome["success"]],
            "results": outcomes,
        }
        return ActionResult(
            success=successful > 0,
            message=f"Bulk assignment completed: {successful} successful, {failed} failed",
            data=summary,
        )

    async def _release_slot(self, assignment: BoothAssignment) -> None:
        if not assignment.interview_slot_id:
            return
        slot = await self.repos.interview_slots.get_by_id(assignment.interview_slot_id)
        if slot is not None:
            slot.is_booked = False
            slot.updated_at = utc_now()
            self.session.add(slot)

    async def _set_seeker_status(self, job_seeker_id: str, status: str) -> Optional[JobSeeker]:
        seeker = await self.repos.job_seekers.get_by_id(job_seeker_id)
        if seeker is not None:
            seeker.assignment_status = status
            seeker.updated_at = utc_now()
            self.session.add(seeker)
        return seeker

    async def _invalidate_seeker(self, job_seeker_id: str, seeker: Optional[JobSeeker]) -> None:
        await self.cached.invalidate_job_seeker(job_seeker_id, seeker.user_id if seeker is not None else None)

    async def update_assignment_status(self, assignment_id: str, status: str, notes: Optional[str] = None) -> ActionResult:
        if status not in {member.value for member in BoothAssignmentStatus}:
            raise InvalidInputError(f"Invalid assignment status: {status}")
        assignment = await self.repos.booth_assignments.get_by_id(assignment_id)
        if assignment is None:
            raise NotFoundError("Assignment not found")

        try:
            assignment.status = status
            if notes is not None:
                assignment.notes = notes
            assignment.updated_at = utc_now()
            self.session.add(assignment)
            seeker = await self._set_seeker_status(
                assignment.job_seeker_id, SEEKER_STATUS_FOR.get(status, AssignmentStatus.ASSIGNED.value)
            )
            if status == BoothAssignmentStatus.CANCELLED.value:
                await self._release_slot(assignment)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self._invalidate_seeker(assignment.job_seeker_id, seeker)
        return ActionResult.ok("Assignment status updated successfully")

    async def remove_booth_assignment(self, assignment_id: str) -> ActionResult:
        assignment = await self.repos.booth_assignments.get_by_id(assignment_id)
        if assignment is None:
            raise NotFoundError("Assignment not found")

        try:
            seeker = await self._set_seeker_status(assignment.job_seeker_id, AssignmentStatus.UNASSIGNED.value)
            await self._release_slot(assignment)
            await self.session.delete(assignment)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self._invalidate_seeker(assignment.job_seeker_id, seeker)
        return ActionResult.ok("Assignment removed successfully")

    async def get_assignment_statistics(self) -> Dict[str, Any]:
        seeker_stats = await self.session.execute(
            select(JobSeeker.assignment_status, func.count())
            .where(JobSeeker.registration_status == RegistrationStatus.APPROVED.value)
            .group_by(JobSeeker.assignment_status)
        )
        by_seeker_status = {status: int(total) for status, total in seeker_stats.all()}

        assignment_stats = await self.session.execute(
            select(BoothAssignment.status, func.count()).group_by(BoothAssignment.status)
        )
        by_status = {status: int(total) for status, total in assignment_stats.all()}

        assignment_count = _open_assignment_count().label("assignment_count")
        slot_count = _slot_count().label("slot_count")
        utilisation = await self.session.execute(
            select(Booth.id, Booth.booth_number, Employer.company_name, assignment_count, slot_count)
            .outerjoin(Employer, Employer.id == Booth.employer_id)
            .where(Booth.is_active == True)  # noqa: E712
            .order_by(assignment_count.desc())
        )

        unassigned = by_seeker_status.get(AssignmentStatus.UNASSIGNED.value, 0)
        return {
            "total_assignments": sum(by_status.values()),
            "assignments_by_status": by_status,
            "job_seekers_by_status": by_seeker_status,
            "assigned_job_seekers": sum(by_seeker_status.values()) - unassigned,
            "unassigned_job_seekers": unassigned,
            "booth_utilization": [
                {
                    "booth_id": booth_id,
                    "booth_number": booth_number,
                    "company_name": company_name,
                    "assignment_count": int(assigned or 0),
                    "slot_count": int(slots or 0),
                }
                for booth_id, booth_number, company_name, assigned, slots in utilisation.all()
            ],
        }

    async def get_booth_assignments(self, filters: AssignmentSearch) -> List[Dict[str, Any]]:
        stmt = (
            select(BoothAssignment, User, Booth, Employer.company_name)
            .outerjoin(JobSeeker, JobSeeker.id == BoothAssignment.job_seeker_id)
            .outerjoin(User, User.id == JobSeeker.user_id)
            .outerjoin(Booth, Booth.id == BoothAssignment.booth_id)
            .outerjoin(Employer, Employer.id == Booth.employer_id)
            .order_by(BoothAssignment.assigned_at.desc())
        )
        if filters.status:
            stmt = stmt.where(BoothAssignment.status == filters.status)
        if filters.booth_id:
            stmt = stmt.where(BoothAssignment.booth_id == filters.booth_id)
        if filters.date_from:
            stmt = stmt.where(BoothAssignment.assigned_at >= filters.date_from)
        if filters.date_to:
            stmt = stmt.where(BoothAssignment.assigned_at <= filters.date_to)
        rows = (await self.session.execute(stmt)).all()

        if filters.search:
            needle = filters.search.lower()
            rows = [
                row
                for row in rows
                if (row[1] is not None and (_contains(row[1].name, needle) or _contains(row[1].email, needle)))
                or _contains(row[3], needle)
                or (row[2] is not None and _contains(row[2].booth_number, needle))
            ]

        return [
            {
                **assignment.model_dump(mode="json"),
                "candidate_name": user.name if user is not None else None,
                "candidate_email": user.email if user is not None else None,
                "booth_number": booth.booth_number if booth is not None else None,
                "company_name": company_name,
            }
            for assignment, user, booth, company_name in rows
        ]
