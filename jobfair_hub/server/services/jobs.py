"""
Job openings of an employer.

Companies list the positions they are hiring for at an event. Interview
slots and shortlist entries may refer to one of the company's own jobs.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.core.database.entities import Employer, ExperienceLevel, InterviewSlot, Job, JobType, Shortlist
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.employers import JobCreate, JobUpdate
from jobfair_hub.server.core.security import CurrentUser

from .errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

JOB_NOT_FOUND = "Job not found or access denied"


def _check_choices(changes: dict) -> None:
    job_type = changes.get("job_type")
    if job_type is not None and job_type not in {member.value for member in JobType}:
        raise InvalidInputError(f"Invalid job type: {job_type}")
    level = changes.get("experience_level")
    if level is not None and level not in {member.value for member in ExperienceLevel}:
        raise InvalidInputError(f"Invalid experience level: {level}")


async def get_employer_job(session: AsyncSession, employer_id: Optional[str], job_id: str) -> Job:
    """Load a job that belongs to ``employer_id``.

    Raises:
        NotFoundError: The job does not exist or belongs to another company
    """
    job = await build_sql_repos_from_session(session=session).jobs.get_by_id(job_id)
    if job is None or employer_id is None or job.employer_id != employer_id:
        raise NotFoundError(JOB_NOT_FOUND)
    return job


class JobService:
    """Create, list, edit and remove an employer's job openings."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def _employer_for(self, user: CurrentUser) -> Employer:
        employer = await self.repos.employers.get_by_user_id(user.id)
        if employer is None:
            raise NotFoundError("Employer profile not found. Please complete your company registration first.")
        return employer

    async def create_job(self, user: CurrentUser, data: JobCreate) -> ActionResult:
        employer = await self._employer_for(user)
        _check_choices(data.model_dump())
        if await self.repos.events.get_by_id(data.event_id) is None:
            raise NotFoundError("Event not found")

        job = await self.repos.jobs.create(Job(employer_id=employer.id, **data.model_dump()))
        logger.info(f"Job {job.id} created by employer {employer.id}")
        return ActionResult.ok("Job created successfully", job.model_dump(mode="json"))

    async def list_jobs(self, user: CurrentUser, event_id: Optional[str] = None, active_only: bool = False) -> List[Job]:
        employer = await self._employer_for(user)
        return await self.repos.jobs.list_by_employer(employer.id, event_id=event_id, active_only=active_only)

    async def update_job(self, user: CurrentUser, job_id: str, data: JobUpdate) -> ActionResult:
        employer = await self._employer_for(user)
        job = await get_employer_job(self.session, employer.id, job_id)
        changes = data.model_dump(exclude_unset=True)
        _check_choices(changes)
        for key, value in changes.items():
            setattr(job, key, value)
        job = await self.repos.jobs.update(job)
        return ActionResult.ok("Job updated successfully", job.model_dump(mode="json"))

    async def delete_job(self, user: CurrentUser, job_id: str) -> ActionResult:
        """Remove a job with its shortlist entries; interview slots stay, without the job."""
        employer = await self._employer_for(user)
        job = await get_employer_job(self.session, employer.id, job_id)
        await self.session.execute(update(InterviewSlot).where(InterviewSlot.job_id == job.id).values(job_id=None))
        await self.session.execute(delete(Shortlist).where(Shortlist.job_id == job.id))
        await self.repos.jobs.delete(job.id)
        return ActionResult.ok("Job deleted successfully")
