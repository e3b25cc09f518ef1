"""
Database repository layer using SQLModel.

Each module provides async data access operations for the entities of the
matching ``entities`` module. All repositories share the CRUD contract of
``AsyncBaseRepository`` through ``SQLModelRepository`` and add the lookups
their services need.

Modules:
- base: Repository contract, shared implementation and QueryBuilder
- bundle: SqlRepoBundle grouping every repository over one session
"""

from .attendance import AttendanceRecordRepository
from .base import AsyncBaseRepository, QueryBuilder, SQLModelRepository
from .booth_assignments import BoothAssignmentRepository
from .booths import BoothRepository, InterviewSlotRepository
from .bundle import SqlRepoBundle, build_sql_repos_from_session
from .employers import EmployerRepository
from .events import CheckpointRepository, EventRepository
from .job_seekers import JobSeekerRepository
from .jobs import JobRepository
from .notifications import NotificationRepository
from .security import SecurityIncidentRepository, SecurityPersonnelRepository
from .shortlists import CandidateInteractionRepository, ShortlistRepository
from .system_logs import SystemLogRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "AttendanceRecordRepository",
    "BoothAssignmentRepository",
    "BoothRepository",
    "CandidateInteractionRepository",
    "CheckpointRepository",
    "EmployerRepository",
    "EventRepository",
    "InterviewSlotRepository",
    "JobRepository",
    "JobSeekerRepository",
    "NotificationRepository",
    "QueryBuilder",
    "SQLModelRepository",
    "SecurityIncidentRepository",
    "SecurityPersonnelRepository",
    "ShortlistRepository",
    "SqlRepoBundle",
    "SystemLogRepository",
    "UserRepository",
    "build_sql_repos_from_session",
]
