"""
Admin Back-Office Endpoints.

Dashboard and audit log, user management, employer verification, job
seeker approval, security oversight, analytics, notifications, attendance
record repair and cache maintenance. Every route requires an active admin.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.admin import (
    AttendanceFixRequest,
    JobSeekerApproval,
    NotificationCreate,
    RoleChange,
)
from jobfair_hub.server.services.deps import (
    AdminServiceDep,
    AdminUserDep,
    AttendanceRepairServiceDep,
    ReportServiceDep,
)

router = APIRouter()


# ----------------------------------------------------------------------
# Dashboard and system
# ----------------------------------------------------------------------


@router.get(
    "/dashboard",
    summary="Dashboard Statistics",
    description="Headline counts for the admin dashboard. Cached briefly unless a refresh is forced.",
    response_description="Dashboard counters.",
)
async def dashboard(
    _admin: AdminUserDep, service: AdminServiceDep, refresh: bool = False
) -> Dict[str, Any]:
    return await service.get_dashboard_stats(force_refresh=refresh)


@router.get(
    "/activity",
    summary="Recent Activity",
    description="The most recent admin actions from the audit log.",
    response_description="Audit log entries, newest first.",
)
async def recent_activity(
    _admin: AdminUserDep, service: AdminServiceDep, limit: int = Query(default=10, ge=1, le=100)
):
    return await service.get_recent_activity(limit)


@router.get(
    "/logs",
    summary="System Logs",
    description="Audit log entries with the acting user's name.",
    response_description="Audit log entries, newest first.",
)
async def system_logs(
    _admin: AdminUserDep, service: AdminServiceDep, limit: int = Query(default=50, ge=1, le=500)
) -> List[Dict[str, Any]]:
    return await service.get_system_logs(limit)


@router.get(
    "/health",
    summary="System Health",
    description="Database and cache status with a health score derived from recent failed actions.",
    response_description="Health report.",
)
async def system_health(_admin: AdminUserDep, service: AdminServiceDep) -> Dict[str, Any]:
    return await service.get_system_health()


@router.get(
    "/reports/event",
    summary="Event Report",
    description="Participation, company size and industry breakdown, verification rate and the employer "
    "directory for the active event.",
    response_description="Report data.",
    responses={404: {"description": "No active event"}},
)
async def event_report(_admin: AdminUserDep, service: ReportServiceDep) -> Dict[str, Any]:
    return await service.generate_event_report()


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------


@router.get(
    "/users",
    summary="List Users",
    description="List accounts filtered by role, active flag and a name or email substring.",
    response_description="Matching users.",
)
async def list_users(
    _admin: AdminUserDep,
    service: AdminServiceDep,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[Dict[str, Any]]:
    return await service.list_users(role=role, is_active=is_active, search=search, limit=limit, offset=offset)


@router.get(
    "/users/{user_id}",
    summary="Get User Details",
    description="An account with its job seeker, employer or security profile.",
    response_description="User details.",
    responses={404: {"description": "User not found"}},
)
async def user_details(user_id: str, _admin: AdminUserDep, service: AdminServiceDep) -> Dict[str, Any]:
    return await service.get_user_details(user_id)


@router.patch(
    "/users/{user_id}/role",
    response_model=ActionResult,
    summary="Change User Role",
    description="Assign a new role to an account.",
    response_description="Outcome of the change.",
    responses={400: {"description": "Invalid role"}, 404: {"description": "User not found"}},
)
async def change_role(user_id: str, data: RoleChange, _admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.change_user_role(user_id, data.role)


@router.post(
    "/users/{user_id}/promote",
    response_model=ActionResult,
    summary="Promote to Admin",
    description="Give an account the admin role.",
    response_description="Outcome of the promotion.",
    responses={404: {"description": "User not found"}},
)
async def promote_user(user_id: str, _admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.promote_user_to_admin(user_id)


@router.post(
    "/users/{user_id}/toggle-status",
    response_model=ActionResult,
    summary="Toggle User Status",
    description="Activate a deactivated account, or deactivate an active one.",
    response_description="Outcome of the toggle.",
    responses={404: {"description": "User not found"}},
)
async def toggle_user(user_id: str, _admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.toggle_user_status(user_id)


@router.delete(
    "/users/{user_id}",
    response_model=ActionResult,
    summary="Delete User",
    description="Delete an account with its job seeker and employer profiles. Admins cannot be deleted.",
    response_description="Outcome of the deletion.",
    responses={403: {"description": "Own or admin account"}, 404: {"description": "User not found"}},
)
async def delete_user(user_id: str, _admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.delete_user(user_id)


# ----------------------------------------------------------------------
# Employers and job seekers
# ----------------------------------------------------------------------


@router.get(
    "/employers",
    summary="List Employers",
    description="List companies, optionally by verification state.",
    response_description="Companies with their account details.",
)
async def list_employers(
    _admin: AdminUserDep, service: AdminServiceDep, is_verified: Optional[bool] = None
) -> List[Dict[str, Any]]:
    return await service.list_employers(is_verified=is_verified)


@router.post(
    "/employers/verify-all",
    response_model=ActionResult,
    summary="Verify All Pending Employers",
    description="Verify every company still awaiting verification.",
    response_description="Number of companies verified.",
)
async def verify_all_employers(_admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.verify_all_pending_employers()


@router.post(
    "/employers/{employer_id}/verify",
    response_model=ActionResult,
    summary="Verify Employer",
    description="Mark a company as verified and notify its account.",
    response_description="Outcome of the verification.",
    responses={404: {"description": "Employer not found"}},
)
async def verify_employer(employer_id: str, _admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.verify_employer(employer_id)


@router.post(
    "/employers/{employer_id}/reject",
    response_model=ActionResult,
    summary="Reject Employer",
    description="Withdraw a company's verification and notify its account.",
    response_description="Outcome of the rejection.",
    responses={404: {"description": "Employer not found"}},
)
async def reject_employer(employer_id: str, _admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.reject_employer(employer_id)


@router.get(
    "/job-seekers",
    summary="List Job Seekers",
    description="List job seekers, optionally by registration status.",
    response_description="Job seekers with their account details.",
)
async def list_job_seekers(
    _admin: AdminUserDep,
    service: AdminServiceDep,
    registration_status: Optional[str] = Query(default=None, alias="status"),
) -> List[Dict[str, Any]]:
    return await service.list_job_seekers(registration_status=registration_status)


@router.post(
    "/job-seekers/approve",
    response_model=ActionResult,
    summary="Approve Job Seeker",
    description="Approve one job seeker's registration.",
    response_description="Outcome of the approval.",
    responses={400: {"description": "Missing job seeker id"}, 404: {"description": "Job seeker not found"}},
)
async def approve_job_seeker(
    data: JobSeekerApproval, _admin: AdminUserDep, service: AdminServiceDep
) -> ActionResult:
    return await service.approve_job_seeker(data.job_seeker_id)


@router.post(
    "/job-seekers/approve-all",
    response_model=ActionResult,
    summary="Approve All Pending Job Seekers",
    description="Approve every job seeker whose registration is pending.",
    response_description="Number of registrations approved.",
)
async def approve_all_job_seekers(_admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.approve_all_pending_job_seekers()


# ----------------------------------------------------------------------
# Security oversight
# ----------------------------------------------------------------------


@router.get(
    "/security/personnel",
    summary="List Security Personnel",
    description="Security staff with their account details.",
    response_description="Security personnel.",
)
async def security_personnel(_admin: AdminUserDep, service: AdminServiceDep) -> List[Dict[str, Any]]:
    return await service.get_security_personnel()


@router.get(
    "/security/incidents",
    summary="List Security Incidents",
    description="Recent incidents with the reporting officer.",
    response_description="Incidents, newest first.",
)
async def security_incidents(
    _admin: AdminUserDep, service: AdminServiceDep, limit: int = Query(default=50, ge=1, le=500)
) -> List[Dict[str, Any]]:
    return await service.get_security_incidents(limit)


# ----------------------------------------------------------------------
# Analytics
# ----------------------------------------------------------------------


@router.get(
    "/analytics/attendance",
    summary="Attendance Analytics",
    description="Daily check-in counts over the last day, week or month.",
    response_description="Check-ins per day.",
)
async def attendance_analytics(
    _admin: AdminUserDep,
    service: AdminServiceDep,
    period: str = Query(default="week", pattern="^(day|week|month)$"),
) -> List[Dict[str, Any]]:
    return await service.get_attendance_analytics(period)


@router.get(
    "/analytics/users",
    summary="User Analytics",
    description="Account counts by role and registration counts by status.",
    response_description="User breakdowns.",
)
async def user_analytics(_admin: AdminUserDep, service: AdminServiceDep) -> Dict[str, Any]:
    return await service.get_user_analytics()


# ----------------------------------------------------------------------
# Notifications
# ----------------------------------------------------------------------


@router.get(
    "/notifications",
    summary="List Notifications",
    description="The signed-in admin's notifications.",
    response_description="Notifications, newest first.",
)
async def list_notifications(
    _admin: AdminUserDep,
    service: AdminServiceDep,
    unread_only: bool = False,
    limit: int = Query(default=50, ge=1, le=200),
):
    return await service.get_notifications(unread_only=unread_only, limit=limit)


@router.post(
    "/notifications",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Notification",
    description="Send a notification to a user.",
    response_description="The created notification id.",
    responses={404: {"description": "User not found"}},
)
async def create_notification(
    data: NotificationCreate, _admin: AdminUserDep, service: AdminServiceDep
) -> ActionResult:
    return await service.create_notification(data)


@router.post(
    "/notifications/{notification_id}/read",
    response_model=ActionResult,
    summary="Mark Notification as Read",
    description="Mark one of the admin's notifications as read.",
    response_description="Outcome of the update.",
    responses={404: {"description": "Notification not found"}},
)
async def read_notification(
    notification_id: str, _admin: AdminUserDep, service: AdminServiceDep
) -> ActionResult:
    return await service.mark_notification_as_read(notification_id)


# ----------------------------------------------------------------------
# Maintenance
# ----------------------------------------------------------------------


@router.get(
    "/attendance-records/fix",
    summary="Analyze Attendance Records",
    description="Report check-ins whose verifier does not resolve to security staff.",
    response_description="Counts and samples of orphaned verifier ids.",
)
async def analyze_attendance(_admin: AdminUserDep, service: AttendanceRepairServiceDep) -> Dict[str, Any]:
    return await service.analyze_attendance_records()


@router.post(
    "/attendance-records/fix",
    summary="Fix Attendance Records",
    description="Clear orphaned verifier ids. Without apply, only reports what would change.",
    response_description="Number of records fixed or that would be fixed.",
)
async def fix_attendance(
    data: AttendanceFixRequest, _admin: AdminUserDep, service: AttendanceRepairServiceDep
) -> Dict[str, Any]:
    return await service.fix_attendance_records(apply=data.apply)


@router.get(
    "/cache/health",
    summary="Cache Health",
    description="Whether the cache answers, and which backend is in use.",
    response_description="Cache status.",
)
async def cache_health(_admin: AdminUserDep, service: AdminServiceDep) -> Dict[str, Any]:
    return await service.cache_health()


@router.post(
    "/cache/clear",
    response_model=ActionResult,
    summary="Clear Cache",
    description="Drop every cached entry.",
    response_description="Outcome of the clear.",
)
async def clear_cache(_admin: AdminUserDep, service: AdminServiceDep) -> ActionResult:
    return await service.clear_cache()
