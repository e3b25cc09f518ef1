"""
Booth Assignment Endpoints.

Admins place approved job seekers at employer booths, optionally into a
specific interview slot, and follow each assignment through to completion.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.admin import (
    AssignmentSearch,
    AssignmentStatusUpdate,
    BoothAssignmentCreate,
    BulkAssignmentCreate,
    UnassignedFilters,
)
from jobfair_hub.core.models.io.common import UTCDateTime
from jobfair_hub.server.services.deps import AdminUserDep, BoothAssignmentServiceDep

router = APIRouter()


@router.get(
    "/unassigned",
    summary="Unassigned Job Seekers",
    description="Approved job seekers without an open assignment, filtered by name, skills and priority.",
    response_description="Candidates, highest priority first.",
)
async def unassigned_job_seekers(
    _admin: AdminUserDep,
    service: BoothAssignmentServiceDep,
    search: Optional[str] = None,
    skills: Optional[List[str]] = Query(default=None),
    priority_level: Optional[str] = None,
) -> List[Dict[str, Any]]:
    filters = UnassignedFilters(search=search, skills=skills or [], priority_level=priority_level)
    return await service.get_unassigned_job_seekers(filters)


@router.get(
    "/booths",
    summary="Available Booths",
    description="Active booths with their open assignments and free interview slots.",
    response_description="Booths with capacity counters.",
)
async def available_booths(_admin: AdminUserDep, service: BoothAssignmentServiceDep) -> List[Dict[str, Any]]:
    return await service.get_available_booths()


@router.get(
    "/stats",
    summary="Assignment Statistics",
    description="Assignment counts by status and by booth.",
    response_description="Assignment counters.",
)
async def assignment_stats(_admin: AdminUserDep, service: BoothAssignmentServiceDep) -> Dict[str, Any]:
    return await service.get_assignment_statistics()


@router.get(
    "",
    summary="List Assignments",
    description="Assignments filtered by status, booth, interview date and a candidate or company substring.",
    response_description="Assignments, newest first.",
)
async def list_assignments(
    _admin: AdminUserDep,
    service: BoothAssignmentServiceDep,
    assignment_status: Optional[str] = Query(default=None, alias="status"),
    booth_id: Optional[str] = None,
    date_from: Optional[UTCDateTime] = None,
    date_to: Optional[UTCDateTime] = None,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    filters = AssignmentSearch(
        status=assignment_status, booth_id=booth_id, date_from=date_from, date_to=date_to, search=search
    )
    return await service.get_booth_assignments(filters)


@router.post(
    "",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Assign Job Seeker",
    description="Assign a job seeker to a booth, booking the interview slot if one is given.",
    response_description="The created assignment id.",
    responses={
        404: {"description": "Job seeker, booth or slot not found"},
        409: {"description": "Already assigned or slot booked"},
    },
)
async def assign_job_seeker(
    data: BoothAssignmentCreate, admin: AdminUserDep, service: BoothAssignmentServiceDep
) -> ActionResult:
    return await service.assign_job_seeker_to_booth(admin, data)


@router.post(
    "/bulk",
    response_model=ActionResult,
    summary="Bulk Assign Job Seekers",
    description="Assign several job seekers to one booth. Each failure is reported without stopping the rest.",
    response_description="Per-candidate outcomes.",
)
async def bulk_assign(
    data: BulkAssignmentCreate, admin: AdminUserDep, service: BoothAssignmentServiceDep
) -> ActionResult:
    return await service.bulk_assign(admin, data)


@router.patch(
    "/{assignment_id}/status",
    response_model=ActionResult,
    summary="Update Assignment Status",
    description="Move an assignment through its workflow. Cancelling frees its interview slot.",
    response_description="Outcome of the update.",
    responses={400: {"description": "Invalid status"}, 404: {"description": "Assignment not found"}},
)
async def update_assignment_status(
    assignment_id: str, data: AssignmentStatusUpdate, _admin: AdminUserDep, service: BoothAssignmentServiceDep
) -> ActionResult:
    return await service.update_assignment_status(assignment_id, data.status, data.notes)


@router.delete(
    "/{assignment_id}",
    response_model=ActionResult,
    summary="Remove Assignment",
    description="Delete an assignment and free its interview slot.",
    response_description="Outcome of the removal.",
    responses={404: {"description": "Assignment not found"}},
)
async def remove_assignment(
    assignment_id: str, _admin: AdminUserDep, service: BoothAssignmentServiceDep
) -> ActionResult:
    return await service.remove_booth_assignment(assignment_id)
