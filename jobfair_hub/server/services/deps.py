"""
Service Dependencies.

Builds request-scoped service instances from the database session, the
shared cache manager and the resolved caller for API endpoints.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.core.database import get_session
from jobfair_hub.server.core.security import CurrentUser, OptionalUserDep

from .admin import AdminService, ensure_admin_access
from .admin_booths import AdminBoothService
from .attendance_repair import AttendanceRepairService
from .booth_assignments import BoothAssignmentService
from .booths import BoothService
from .cache import CacheDep
from .employers import EmployerService
from .events import EventService
from .jobs import JobService
from .registration import RegistrationService
from .reports import ReportService
from .security_staff import SecurityStaffService
from .shortlists import ShortlistService
from .verification import VerificationService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_admin_user(session: SessionDep, user: OptionalUserDep) -> CurrentUser:
    await ensure_admin_access(session, user)
    return user


AdminUserDep = Annotated[CurrentUser, Depends(get_admin_user)]


def get_registration_service(session: SessionDep, cache: CacheDep) -> RegistrationService:
    return RegistrationService(session, cache)


def get_verification_service(session: SessionDep, cache: CacheDep) -> VerificationService:
    return VerificationService(session, cache)


def get_employer_service(session: SessionDep, cache: CacheDep) -> EmployerService:
    return EmployerService(session, cache)


def get_booth_service(session: SessionDep, cache: CacheDep) -> BoothService:
    return BoothService(session, cache)


def get_shortlist_service(session: SessionDep) -> ShortlistService:
    return ShortlistService(session)


def get_security_staff_service(session: SessionDep, cache: CacheDep) -> SecurityStaffService:
    return SecurityStaffService(session, cache)


def get_event_service(session: SessionDep, cache: CacheDep) -> EventService:
    return EventService(session, cache)


def get_booth_assignment_service(session: SessionDep, cache: CacheDep) -> BoothAssignmentService:
    return BoothAssignmentService(session, cache)


def get_attendance_repair_service(session: SessionDep) -> AttendanceRepairService:
    return AttendanceRepairService(session)


def get_job_service(session: SessionDep) -> JobService:
    return JobService(session)


def get_admin_booth_service(session: SessionDep, cache: CacheDep) -> AdminBoothService:
    return AdminBoothService(session, cache)


def get_report_service(session: SessionDep) -> ReportService:
    return ReportService(session)


def get_admin_service(session: SessionDep, cache: CacheDep, admin: AdminUserDep) -> AdminService:
    return AdminService(session, cache, admin)


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
VerificationServiceDep = Annotated[VerificationService, Depends(get_verification_service)]
EmployerServiceDep = Annotated[EmployerService, Depends(get_employer_service)]
BoothServiceDep = Annotated[BoothService, Depends(get_booth_service)]
ShortlistServiceDep = Annotated[ShortlistService, Depends(get_shortlist_service)]
SecurityStaffServiceDep = Annotated[SecurityStaffService, Depends(get_security_staff_service)]
EventServiceDep = Annotated[EventService, Depends(get_event_service)]
BoothAssignmentServiceDep = Annotated[BoothAssignmentService, Depends(get_booth_assignment_service)]
AttendanceRepairServiceDep = Annotated[AttendanceRepairService, Depends(get_attendance_repair_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
JobServiceDep = Annotated[JobService, Depends(get_job_service)]
AdminBoothServiceDep = Annotated[AdminBoothService, Depends(get_admin_booth_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
