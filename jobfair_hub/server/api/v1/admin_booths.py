"""
Admin Booth Management Endpoints.

Admins set booths up for companies by the email of the company's user,
create unassigned booths to hand out later, and edit, (de)activate or
delete any booth.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, status

from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.admin import (
    AdminBoothCreate,
    AdminBoothUpdate,
    BoothEmployerAssignment,
    UnassignedBoothCreate,
)
from jobfair_hub.server.services.deps import AdminBoothServiceDep, AdminUserDep

router = APIRouter()


@router.get(
    "",
    summary="List Booths",
    description="Every booth with its company and event, optionally for one event.",
    response_description="Booths ordered by booth number.",
)
async def list_booths(
    _admin: AdminUserDep, service: AdminBoothServiceDep, event_id: Optional[str] = None
) -> List[Dict[str, Any]]:
    return await service.list_booths(event_id)


@router.post(
    "",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Booth",
    description="Create an active booth for the company whose user registered with the given email.",
    response_description="The created booth id.",
    responses={
        400: {"description": "The user has no company profile"},
        404: {"description": "Event or user not found"},
        409: {"description": "Booth number already used in the event"},
    },
)
async def create_booth(data: AdminBoothCreate, admin: AdminUserDep, service: AdminBoothServiceDep) -> ActionResult:
    return await service.create_booth(admin, data)


@router.post(
    "/unassigned",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Unassigned Booth",
    description="Create an inactive booth without a company.",
    response_description="The created booth id.",
    responses={404: {"description": "Event not found"}, 409: {"description": "Booth number already used in the event"}},
)
async def create_unassigned_booth(
    data: UnassignedBoothCreate, admin: AdminUserDep, service: AdminBoothServiceDep
) -> ActionResult:
    return await service.create_unassigned_booth(admin, data)


@router.patch(
    "/{booth_id}",
    response_model=ActionResult,
    summary="Update Booth",
    description="Edit a booth. Giving an employer email moves the booth to that company.",
    response_description="The updated booth.",
    responses={404: {"description": "Booth or employer not found"}, 409: {"description": "Booth number taken"}},
)
async def update_booth(
    booth_id: str, data: AdminBoothUpdate, admin: AdminUserDep, service: AdminBoothServiceDep
) -> ActionResult:
    return await service.update_booth(admin, booth_id, data)


@router.delete(
    "/{booth_id}",
    response_model=ActionResult,
    summary="Delete Booth",
    description="Delete a booth.",
    response_description="Outcome of the deletion.",
    responses={404: {"description": "Booth not found"}},
)
async def delete_booth(booth_id: str, admin: AdminUserDep, service: AdminBoothServiceDep) -> ActionResult:
    return await service.delete_booth(admin, booth_id)


@router.post(
    "/{booth_id}/toggle",
    response_model=ActionResult,
    summary="Toggle Booth Status",
    description="Activate or deactivate a booth.",
    response_description="Outcome of the toggle.",
    responses={404: {"description": "Booth not found"}},
)
async def toggle_booth(booth_id: str, admin: AdminUserDep, service: AdminBoothServiceDep) -> ActionResult:
    return await service.toggle_booth_status(admin, booth_id)


@router.post(
    "/{booth_id}/assign",
    response_model=ActionResult,
    summary="Assign Booth to Company",
    description="Give a booth to the company whose user registered with the given email, and activate it.",
    response_description="Outcome of the assignment.",
    responses={404: {"description": "Booth or user not found"}, 400: {"description": "The user has no company profile"}},
)
async def assign_booth(
    booth_id: str, data: BoothEmployerAssignment, admin: AdminUserDep, service: AdminBoothServiceDep
) -> ActionResult:
    return await service.assign_booth_to_employer(admin, booth_id, data.employer_email)
