"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, for use by the service layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .attendance import AttendanceRecordRepository
from .booth_assignments import BoothAssignmentRepository
from .booths import BoothRepository, InterviewSlotRepository
from .employers import EmployerRepository
from .events import CheckpointRepository, EventRepository
from .job_seekers import JobSeekerRepository
from .jobs import JobRepository
from .notifications import NotificationRepository
from .security import SecurityIncidentRepository, SecurityPersonnelRepository
from .shortlists import CandidateInteractionRepository, ShortlistRepository
from .system_logs import SystemLogRepository
from .users import UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    session: AsyncSession
    users: UserRepository
    job_seekers: JobSeekerRepository
    jobs: JobRepository
    employers: EmployerRepository
    events: EventRepository
    checkpoints: CheckpointRepository
    booths: BoothRepository
    interview_slots: InterviewSlotRepository
    attendance: AttendanceRecordRepository
    security_personnel: SecurityPersonnelRepository
    incidents: SecurityIncidentRepository
    shortlists: ShortlistRepository
    interactions: CandidateInteractionRepository
    booth_assignments: BoothAssignmentRepository
    system_logs: SystemLogRepository
    notifications: NotificationRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        session=session,
        users=UserRepository(session),
        job_seekers=JobSeekerRepository(session),
        jobs=JobRepository(session),
        employers=EmployerRepository(session),
        events=EventRepository(session),
        checkpoints=CheckpointRepository(session),
        booths=BoothRepository(session),
        interview_slots=InterviewSlotRepository(session),
        attendance=AttendanceRecordRepository(session),
        security_personnel=SecurityPersonnelRepository(session),
        incidents=SecurityIncidentRepository(session),
        shortlists=ShortlistRepository(session),
        interactions=CandidateInteractionRepository(session),
        booth_assignments=BoothAssignmentRepository(session),
        system_logs=SystemLogRepository(session),
        notifications=NotificationRepository(session),
    )
