"""
Database entity models.

This package contains all database entity models organized by business
domain. Each module represents either a single table or a small group of
tables that belong together.

Modules:
- users: User accounts and roles
- job_seekers: Attendee profiles and check-in credentials
- employers: Company profiles
- events: Events and their checkpoints
- jobs: Job openings employers bring to an event
- booths: Employer booths and interview slots
- attendance: Check-in audit records
- security: Security personnel and incidents
- shortlists: Employer shortlists and candidate interactions
- booth_assignments: Admin assignments of job seekers to booths
- system_logs: Audit log of actions
- notifications: In-app notifications
"""

from .attendance import AttendanceRecord, AttendanceStatus, VerificationMethod
from .booth_assignments import BoothAssignment, BoothAssignmentStatus
from .booths import Booth, InterviewSlot
from .employers import CompanySize, Employer
from .events import Checkpoint, CheckpointType, Event, EventType
from .job_seekers import AssignmentStatus, JobSeeker, RegistrationStatus
from .jobs import ExperienceLevel, Job, JobType
from .notifications import Notification, NotificationType
from .security import (
    ClearanceLevel,
    IncidentSeverity,
    IncidentStatus,
    IncidentType,
    SecurityIncident,
    SecurityPersonnel,
)
from .shortlists import (
    DEFAULT_LIST_NAME,
    CandidateInteraction,
    InteractionType,
    Shortlist,
    ShortlistPriority,
    ShortlistStatus,
)
from .system_logs import SystemLog
from .users import User, UserRole

__all__ = [
    "AssignmentStatus",
    "AttendanceRecord",
    "AttendanceStatus",
    "Booth",
    "BoothAssignment",
    "BoothAssignmentStatus",
    "CandidateInteraction",
    "Checkpoint",
    "CheckpointType",
    "ClearanceLevel",
    "CompanySize",
    "DEFAULT_LIST_NAME",
    "Employer",
    "Event",
    "EventType",
    "ExperienceLevel",
    "IncidentSeverity",
    "IncidentStatus",
    "IncidentType",
    "InteractionType",
    "InterviewSlot",
    "Job",
    "JobSeeker",
    "JobType",
    "Notification",
    "NotificationType",
    "RegistrationStatus",
    "SecurityIncident",
    "SecurityPersonnel",
    "Shortlist",
    "ShortlistPriority",
    "ShortlistStatus",
    "SystemLog",
    "User",
    "UserRole",
    "VerificationMethod",
]
