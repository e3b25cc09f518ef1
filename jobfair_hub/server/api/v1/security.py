"""
Security Endpoints.

Check-in verification by PIN, ticket number or QR payload, attendance
history and shift statistics for security staff, security profile setup,
and incident reporting. Admins may verify attendees too; their check-ins are
recorded without a verifier.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.security import IncidentReport, IncidentStatusUpdate, SecurityProfileSetup
from jobfair_hub.core.models.io.verification import (
    AttendanceHistoryItem,
    PinVerificationRequest,
    QRVerificationRequest,
    SecurityStats,
    TicketVerificationRequest,
    VerificationResponse,
)
from jobfair_hub.server.core.security import CurrentUser, CurrentUserDep
from jobfair_hub.server.middleware.rate_limit import client_ip
from jobfair_hub.server.services.deps import SecurityStaffServiceDep, VerificationServiceDep
from jobfair_hub.server.services.verification import (
    ClientInfo,
    VerificationFailure,
    VerificationResult,
    VerificationService,
)

router = APIRouter()

FAILURE_STATUS = {
    VerificationFailure.INVALID_FORMAT: 400,
    VerificationFailure.NOT_FOUND: 404,
    VerificationFailure.NO_ACTIVE_EVENT: 409,
    VerificationFailure.SYSTEM_ERROR: 500,
}

VERIFICATION_RESPONSES = {
    400: {"description": "Malformed credential"},
    404: {"description": "No attendee with this credential"},
    409: {"description": "No active event"},
    500: {"description": "Verification failed due to a system error"},
}


def _client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )


async def _verifier(service: VerificationService, user: CurrentUser) -> Optional[str]:
    return await service.verifier_id_for(user.id, is_admin=user.is_admin)


def _respond(result: VerificationResult) -> JSONResponse:
    body = VerificationResponse(success=result.success, message=result.message, attendee=result.attendee)
    status_code = 200 if result.success else FAILURE_STATUS[result.failure]
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post(
    "/verify/pin",
    response_model=VerificationResponse,
    summary="Verify Attendee by PIN",
    description="Check an attendee in with their 6-digit PIN against the active event.",
    response_description="Verification outcome and attendee summary.",
    responses=VERIFICATION_RESPONSES,
)
async def verify_pin(
    body: PinVerificationRequest, request: Request, user: CurrentUserDep, service: VerificationServiceDep
):
    """
    Verify an attendee by PIN.

    A repeated verification still succeeds and is recorded as a duplicate
    check-in attempt.
    """
    verifier = await _verifier(service, user)
    return _respond(await service.verify_attendee_pin(body.pin, verifier, _client_info(request)))


@router.post(
    "/verify/ticket",
    response_model=VerificationResponse,
    summary="Verify Attendee by Ticket",
    description="Check an attendee in with their ticket number against the active event.",
    response_description="Verification outcome and attendee summary.",
    responses=VERIFICATION_RESPONSES,
)
async def verify_ticket(
    body: TicketVerificationRequest, request: Request, user: CurrentUserDep, service: VerificationServiceDep
):
    verifier = await _verifier(service, user)
    return _respond(await service.verify_attendee_ticket(body.ticket_number, verifier, _client_info(request)))


@router.post(
    "/verify/qr",
    response_model=VerificationResponse,
    summary="Verify Attendee by QR Code",
    description="Check an attendee in from a scanned QR payload issued for this event.",
    response_description="Verification outcome and attendee summary.",
    responses=VERIFICATION_RESPONSES,
)
async def verify_qr(
    body: QRVerificationRequest, request: Request, user: CurrentUserDep, service: VerificationServiceDep
):
    verifier = await _verifier(service, user)
    return _respond(await service.verify_attendee_qr(body.qr_data, verifier, _client_info(request)))


@router.get(
    "/attendance",
    response_model=List[AttendanceHistoryItem],
    summary="Attendance History",
    description="List recent attendance records, newest first, optionally for one event.",
    response_description="Attendance records with attendee names.",
)
async def attendance_history(
    service: VerificationServiceDep,
    event_id: Optional[str] = None,
    limit: int = Query(default=50, ge=1, le=500),
) -> List[AttendanceHistoryItem]:
    return await service.get_attendance_history(event_id=event_id, limit=limit)


@router.get(
    "/stats",
    response_model=SecurityStats,
    summary="Security Statistics",
    description="Today's check-ins overall and by the caller, and the number of open incidents.",
    response_description="Shift statistics.",
)
async def security_stats(user: CurrentUserDep, service: VerificationServiceDep) -> SecurityStats:
    return await service.get_security_stats(await _verifier(service, user))


@router.post(
    "/setup",
    response_model=ActionResult,
    status_code=201,
    summary="Set Up Security Profile",
    description="Register the signed-in user as security staff with a unique badge number.",
    response_description="The created security profile id.",
    responses={409: {"description": "Badge number in use or profile already exists"}},
)
async def setup_profile(
    data: SecurityProfileSetup, user: CurrentUserDep, service: SecurityStaffServiceDep
) -> ActionResult:
    return await service.setup_security_profile(user.id, data)


@router.post(
    "/incidents",
    response_model=ActionResult,
    status_code=201,
    summary="Report Incident",
    description="File an incident against the active event. High and critical incidents alert every admin.",
    response_description="The created incident id.",
    responses={403: {"description": "Caller has no security profile"}, 404: {"description": "No active event"}},
)
async def report_incident(data: IncidentReport, user: CurrentUserDep, service: SecurityStaffServiceDep) -> ActionResult:
    return await service.report_incident(user, data)


@router.patch(
    "/incidents/{incident_id}",
    response_model=ActionResult,
    summary="Update Incident Status",
    description="Move an incident through its workflow. Resolving or closing records who did it and when.",
    response_description="The updated incident.",
    responses={404: {"description": "Incident not found"}},
)
async def update_incident(
    incident_id: str, update: IncidentStatusUpdate, user: CurrentUserDep, service: SecurityStaffServiceDep
) -> ActionResult:
    return await service.update_incident_status(incident_id, update, user)
