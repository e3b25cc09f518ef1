"""
Event Management Endpoints.

Admins create, edit, duplicate and (de)activate events. Activating an event
deactivates every other one, so at most one event is active at a time.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, status

from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.events import EventCreate, EventDuplicate, EventUpdate
from jobfair_hub.server.services.deps import AdminUserDep, EventServiceDep

router = APIRouter()


@router.get(
    "",
    summary="List Events",
    description="Every event, newest first.",
    response_description="Events.",
)
async def list_events(_admin: AdminUserDep, service: EventServiceDep) -> List[Dict[str, Any]]:
    return await service.list_events()


@router.post(
    "",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Event",
    description="Create an event with its default checkpoints.",
    response_description="The created event id.",
    responses={400: {"description": "Inconsistent dates"}},
)
async def create_event(data: EventCreate, admin: AdminUserDep, service: EventServiceDep) -> ActionResult:
    return await service.create_event(admin, data)


@router.get(
    "/current",
    summary="Current Event",
    description="The active event with its attendee counts.",
    response_description="The active event, or null.",
)
async def current_event(_admin: AdminUserDep, service: EventServiceDep) -> Optional[Dict[str, Any]]:
    return await service.get_current_event()


@router.patch(
    "/{event_id}",
    response_model=ActionResult,
    summary="Update Event",
    description="Update an event's details. Unset fields are left alone.",
    response_description="Outcome of the update.",
    responses={400: {"description": "Inconsistent dates"}, 404: {"description": "Event not found"}},
)
async def update_event(
    event_id: str, data: EventUpdate, admin: AdminUserDep, service: EventServiceDep
) -> ActionResult:
    return await service.update_event(admin, event_id, data)


@router.delete(
    "/{event_id}",
    response_model=ActionResult,
    summary="Delete Event",
    description="Delete an event and its checkpoints. Events with attendance or booths are kept.",
    response_description="Outcome of the deletion.",
    responses={404: {"description": "Event not found"}, 409: {"description": "Event has attendance or booths"}},
)
async def delete_event(event_id: str, admin: AdminUserDep, service: EventServiceDep) -> ActionResult:
    return await service.delete_event(admin, event_id)


@router.post(
    "/{event_id}/toggle",
    response_model=ActionResult,
    summary="Toggle Event Status",
    description="Activate or deactivate an event.",
    response_description="Outcome of the toggle.",
    responses={404: {"description": "Event not found"}},
)
async def toggle_event(event_id: str, admin: AdminUserDep, service: EventServiceDep) -> ActionResult:
    return await service.toggle_event_status(admin, event_id)


@router.get(
    "/{event_id}/stats",
    summary="Event Statistics",
    description="Attendance, booth, checkpoint and incident counts for an event.",
    response_description="Event counters.",
    responses={404: {"description": "Event not found"}},
)
async def event_stats(event_id: str, _admin: AdminUserDep, service: EventServiceDep) -> Dict[str, int]:
    return await service.get_event_stats(event_id)


@router.post(
    "/{event_id}/duplicate",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate Event",
    description="Copy an event one week later, inactive, with its checkpoints.",
    response_description="The copy's event id.",
    responses={404: {"description": "Original event not found"}},
)
async def duplicate_event(
    event_id: str, data: EventDuplicate, admin: AdminUserDep, service: EventServiceDep
) -> ActionResult:
    return await service.duplicate_event(admin, event_id, data.new_name)


@router.get(
    "/{event_id}/checkpoints",
    summary="List Checkpoints",
    description="The checkpoints configured for an event.",
    response_description="Checkpoints.",
)
async def list_checkpoints(event_id: str, _admin: AdminUserDep, service: EventServiceDep):
    return await service.list_checkpoints(event_id)
