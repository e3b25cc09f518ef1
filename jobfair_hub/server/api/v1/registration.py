"""
Job Seeker Registration Endpoints.

Profile creation issues the attendee's PIN and ticket number; attendees can
read and update their profile, rotate their PIN, and check a ticket and PIN
pair before the event.
"""

from fastapi import APIRouter, status

from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.registration import (
    JobSeekerProfileCreate,
    JobSeekerProfileUpdate,
    PinCheckRequest,
    PinCheckResult,
    UserProfileRead,
)
from jobfair_hub.server.core.security import CurrentUserDep
from jobfair_hub.server.services.deps import RegistrationServiceDep

router = APIRouter()


@router.post(
    "/job-seekers",
    response_model=ActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job Seeker Profile",
    description="Register the signed-in user as a job seeker and issue their PIN and ticket number.",
    response_description="The issued PIN and ticket number.",
    responses={404: {"description": "User not found"}, 409: {"description": "Profile already exists"}},
)
async def create_job_seeker_profile(
    data: JobSeekerProfileCreate, user: CurrentUserDep, service: RegistrationServiceDep
) -> ActionResult:
    return await service.create_job_seeker_profile(user.id, data)


@router.get(
    "/profile",
    response_model=UserProfileRead,
    summary="Get Profile",
    description="Retrieve the signed-in user's account and job seeker profile.",
    response_description="The account and, if registered, the job seeker profile.",
)
async def get_profile(user: CurrentUserDep, service: RegistrationServiceDep) -> UserProfileRead:
    return await service.get_user_profile(user.id)


@router.patch(
    "/profile",
    response_model=ActionResult,
    summary="Update Profile",
    description="Update fields of the signed-in user's job seeker profile. Unset fields are left alone.",
    response_description="Outcome of the update.",
    responses={404: {"description": "Job seeker profile not found"}},
)
async def update_profile(
    updates: JobSeekerProfileUpdate, user: CurrentUserDep, service: RegistrationServiceDep
) -> ActionResult:
    return await service.update_job_seeker_profile(user.id, updates)


@router.post(
    "/pin/regenerate",
    response_model=ActionResult,
    summary="Regenerate PIN",
    description="Issue a new PIN, valid for 24 hours, replacing the current one.",
    response_description="The new PIN.",
)
async def regenerate_pin(user: CurrentUserDep, service: RegistrationServiceDep) -> ActionResult:
    return await service.regenerate_pin(user.id)


@router.post(
    "/pin/verify",
    response_model=PinCheckResult,
    summary="Verify PIN",
    description="Check a ticket number and PIN pair. A valid, unexpired pair approves the registration.",
    response_description="Whether the pair is valid, and why not.",
)
async def verify_pin(request: PinCheckRequest, service: RegistrationServiceDep) -> PinCheckResult:
    """
    Verify a ticket and PIN pair.

    Does not require a session, so attendees can confirm their credentials
    from the registration page.
    """
    return await service.verify_pin(request.ticket_number, request.pin)
