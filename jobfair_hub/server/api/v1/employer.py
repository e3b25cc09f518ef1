"""
Employer Endpoints.

Company onboarding and profile, the company's booth and its interview
slots, its job openings, candidate shortlists and the candidate interaction
log.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from jobfair_hub.core.database.entities import Job
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.employers import (
    BoothInput,
    BulkDeleteRequest,
    EmployerProfileInput,
    EmployerRead,
    InteractionCreate,
    InterviewSlotCreate,
    InterviewSlotUpdate,
    JobCreate,
    JobUpdate,
    ShortlistCreate,
    ShortlistEntryRead,
    ShortlistNotesUpdate,
    ShortlistStatusUpdate,
    SlotSearch,
)
from jobfair_hub.server.core.security import CurrentUserDep
from jobfair_hub.server.services.deps import (
    BoothServiceDep,
    EmployerServiceDep,
    JobServiceDep,
    ShortlistServiceDep,
)

router = APIRouter()


# ----------------------------------------------------------------------
# Company profile
# ----------------------------------------------------------------------


@router.post(
    "/setup",
    response_model=ActionResult,
    summary="Set Up Employer Profile",
    description="Create the signed-in user's company profile and make them an employer. "
    "Returns a welcome back message if the profile already exists.",
    response_description="The company profile.",
    responses={400: {"description": "Missing or invalid fields"}},
)
async def setup_employer(data: EmployerProfileInput, user: CurrentUserDep, service: EmployerServiceDep) -> ActionResult:
    return await service.create_employer_profile(user.id, data)


@router.get(
    "/profile",
    response_model=Optional[EmployerRead],
    summary="Get Employer Profile",
    description="Retrieve the signed-in employer's company profile.",
    response_description="The company profile, or null if none exists.",
)
async def get_employer_profile(user: CurrentUserDep, service: EmployerServiceDep) -> Optional[EmployerRead]:
    return await service.get_employer_profile(user.id)


@router.patch(
    "/profile/{employer_id}",
    response_model=ActionResult,
    summary="Update Employer Profile",
    description="Update the caller's own company profile.",
    response_description="The updated company profile.",
    responses={403: {"description": "Not the caller's company"}, 404: {"description": "Employer profile not found"}},
)
async def update_employer_profile(
    employer_id: str, data: EmployerProfileInput, user: CurrentUserDep, service: EmployerServiceDep
) -> ActionResult:
    return await service.update_employer_profile(user.id, employer_id, data)


# ----------------------------------------------------------------------
# Booth and interview slots
# ----------------------------------------------------------------------


@router.put(
    "/booth",
    response_model=ActionResult,
    summary="Create or Update Booth",
    description="Create the company's booth for an event, or update it if it already exists.",
    response_description="The booth.",
    responses={403: {"description": "Admins manage booths through the back-office"}},
)
async def put_booth(data: BoothInput, user: CurrentUserDep, service: BoothServiceDep) -> ActionResult:
    return await service.create_or_update_booth(user, data)


@router.get(
    "/booth",
    summary="Get Booth",
    description="Retrieve the company's booth and its event.",
    response_description="The booth and event, or null.",
)
async def get_booth(
    user: CurrentUserDep, service: BoothServiceDep, event_id: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    return await service.get_employer_booth(user, event_id)


@router.post(
    "/slots",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Interview Slot",
    description="Open an interview slot at a booth. Slots at the same booth may not overlap.",
    response_description="The created slot.",
    responses={404: {"description": "Booth not found"}, 409: {"description": "Overlapping slot"}},
)
async def create_slot(data: InterviewSlotCreate, user: CurrentUserDep, service: BoothServiceDep) -> ActionResult:
    return await service.create_interview_slot(user, data)


@router.get(
    "/slots",
    summary="Search Interview Slots",
    description="List interview slots visible to the caller, filtered by booth, booking status, date range "
    "and interviewer.",
    response_description="Matching slots ordered by start time.",
)
async def search_slots(
    user: CurrentUserDep,
    service: BoothServiceDep,
    booth_id: Optional[str] = None,
    slot_status: Optional[str] = Query(default=None, alias="status", description="available or booked"),
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    interviewer: Optional[str] = None,
) -> List[Dict[str, Any]]:
    filters = SlotSearch(
        booth_id=booth_id, status=slot_status, date_from=date_from, date_to=date_to, interviewer=interviewer
    )
    return await service.search_interview_slots(user, filters)


@router.post(
    "/slots/bulk-delete",
    response_model=ActionResult,
    summary="Bulk Delete Interview Slots",
    description="Delete several slots. Booked slots and slots of other companies are skipped and reported.",
    response_description="Deleted ids and per-slot errors.",
)
async def bulk_delete_slots(data: BulkDeleteRequest, user: CurrentUserDep, service: BoothServiceDep) -> ActionResult:
    return await service.bulk_delete_interview_slots(user, data.slot_ids)


@router.patch(
    "/slots/{slot_id}",
    response_model=ActionResult,
    summary="Update Interview Slot",
    description="Reschedule or annotate an unbooked slot.",
    response_description="The updated slot.",
    responses={404: {"description": "Slot not found"}, 409: {"description": "Booked or overlapping slot"}},
)
async def update_slot(
    slot_id: str, data: InterviewSlotUpdate, user: CurrentUserDep, service: BoothServiceDep
) -> ActionResult:
    return await service.update_interview_slot(user, slot_id, data)


@router.delete(
    "/slots/{slot_id}",
    response_model=ActionResult,
    summary="Delete Interview Slot",
    description="Delete an unbooked slot.",
    response_description="Outcome of the deletion.",
    responses={404: {"description": "Slot not found"}, 409: {"description": "Slot is booked"}},
)
async def delete_slot(slot_id: str, user: CurrentUserDep, service: BoothServiceDep) -> ActionResult:
    return await service.delete_interview_slot(user, slot_id)


# ----------------------------------------------------------------------
# Job openings
# ----------------------------------------------------------------------


@router.post(
    "/jobs",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job",
    description="Post a job opening for an event.",
    response_description="The created job.",
    responses={400: {"description": "Unknown job type or experience level"}, 404: {"description": "Event not found"}},
)
async def create_job(data: JobCreate, user: CurrentUserDep, service: JobServiceDep) -> ActionResult:
    return await service.create_job(user, data)


@router.get(
    "/jobs",
    response_model=List[Job],
    summary="List Jobs",
    description="The company's job openings, optionally for one event or only the active ones.",
    response_description="Jobs, newest first.",
)
async def list_jobs(
    user: CurrentUserDep, service: JobServiceDep, event_id: Optional[str] = None, active_only: bool = False
) -> List[Job]:
    return await service.list_jobs(user, event_id=event_id, active_only=active_only)


@router.patch(
    "/jobs/{job_id}",
    response_model=ActionResult,
    summary="Update Job",
    description="Edit or (de)activate one of the company's job openings.",
    response_description="The updated job.",
    responses={404: {"description": "Job not found"}},
)
async def update_job(job_id: str, data: JobUpdate, user: CurrentUserDep, service: JobServiceDep) -> ActionResult:
    return await service.update_job(user, job_id, data)


@router.delete(
    "/jobs/{job_id}",
    response_model=ActionResult,
    summary="Delete Job",
    description="Delete a job opening and its shortlist entries. Interview slots for it are kept.",
    response_description="Outcome of the deletion.",
    responses={404: {"description": "Job not found"}},
)
async def delete_job(job_id: str, user: CurrentUserDep, service: JobServiceDep) -> ActionResult:
    return await service.delete_job(user, job_id)


# ----------------------------------------------------------------------
# Shortlists and interactions
# ----------------------------------------------------------------------


@router.post(
    "/shortlists",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Add to Shortlist",
    description="Add a candidate to one of the company's shortlists. The candidate is notified.",
    response_description="The shortlist entry.",
    responses={409: {"description": "Candidate already in this shortlist"}},
)
async def add_to_shortlist(data: ShortlistCreate, user: CurrentUserDep, service: ShortlistServiceDep) -> ActionResult:
    return await service.add_to_shortlist(user, data)


@router.get(
    "/shortlists",
    response_model=List[ShortlistEntryRead],
    summary="List Shortlists",
    description="List the company's shortlist entries with candidate names, optionally for one list.",
    response_description="Shortlist entries, newest first.",
)
async def list_shortlists(
    user: CurrentUserDep, service: ShortlistServiceDep, list_name: Optional[str] = None
) -> List[ShortlistEntryRead]:
    return await service.get_employer_shortlists(user, list_name)


@router.patch(
    "/shortlists/{shortlist_id}/status",
    response_model=ActionResult,
    summary="Update Shortlist Status",
    description="Move a shortlisted candidate to another status.",
    response_description="The updated entry.",
    responses={404: {"description": "Shortlist entry not found"}},
)
async def update_shortlist_status(
    shortlist_id: str, data: ShortlistStatusUpdate, user: CurrentUserDep, service: ShortlistServiceDep
) -> ActionResult:
    return await service.update_shortlist_status(user, shortlist_id, data.status)


@router.patch(
    "/shortlists/{shortlist_id}/notes",
    response_model=ActionResult,
    summary="Update Shortlist Notes",
    description="Replace the notes on a shortlist entry and log a note interaction.",
    response_description="The updated entry.",
    responses={404: {"description": "Shortlist entry not found"}},
)
async def update_shortlist_notes(
    shortlist_id: str, data: ShortlistNotesUpdate, user: CurrentUserDep, service: ShortlistServiceDep
) -> ActionResult:
    return await service.update_shortlist_notes(user, shortlist_id, data.notes)


@router.delete(
    "/shortlists/{shortlist_id}",
    response_model=ActionResult,
    summary="Remove from Shortlist",
    description="Remove a candidate from the company's shortlist.",
    response_description="Outcome of the removal.",
    responses={404: {"description": "Shortlist entry not found"}},
)
async def remove_from_shortlist(shortlist_id: str, user: CurrentUserDep, service: ShortlistServiceDep) -> ActionResult:
    return await service.remove_from_shortlist(user, shortlist_id)


@router.post(
    "/interactions",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Log Candidate Interaction",
    description="Record a conversation, interview or other interaction with a candidate.",
    response_description="The logged interaction.",
)
async def log_interaction(data: InteractionCreate, user: CurrentUserDep, service: ShortlistServiceDep) -> ActionResult:
    return await service.log_candidate_interaction(user, data)
