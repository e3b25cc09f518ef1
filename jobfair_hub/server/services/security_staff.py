"""
Security staff profiles and incident reports.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.core.cache import CacheManager
from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import (
    ClearanceLevel,
    IncidentSeverity,
    IncidentStatus,
    IncidentType,
    NotificationType,
    SecurityIncident,
    SecurityPersonnel,
    UserRole,
)
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.security import (
    IncidentRead,
    IncidentReport,
    IncidentStatusUpdate,
    SecurityProfileSetup,
)
from jobfair_hub.server.core.security import CurrentUser

from .audit import AuditService
from .cached_queries import CachedQueries
from .errors import ConflictError, InvalidInputError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

ALERT_SEVERITIES = {IncidentSeverity.HIGH.value, IncidentSeverity.CRITICAL.value}
CLOSING_STATUSES = {IncidentStatus.RESOLVED.value, IncidentStatus.CLOSED.value}


def _require_member(value: str, allowed: type, label: str) -> str:
    if value not in {member.value for member in allowed}:
        raise InvalidInputError(f"Invalid {label}: {value}")
    return value


class SecurityStaffService:
    """Security personnel onboarding and incident handling."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.audit = AuditService(session)
        self.cached = CachedQueries(session, cache)

    async def setup_security_profile(self, user_id: str, data: SecurityProfileSetup) -> ActionResult:
        """Register the caller as security staff.

        Raises:
            ConflictError: The badge number is taken or the user already has a profile
            NotFoundError: The user does not exist
        """
        if await self.repos.security_personnel.get_by_badge_number(data.badge_number) is not None:
            raise ConflictError("Badge number is already in use. Please contact your supervisor.")
        if await self.repos.security_personnel.get_by_user_id(user_id) is not None:
            raise ConflictError("Security profile already exists for this user.")
        _require_member(data.clearance_level, ClearanceLevel, "clearance level")

        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        profile = SecurityPersonnel(
            user_id=user_id,
            badge_number=data.badge_number,
            department=data.department,
            clearance_level=data.clearance_level,
            assigned_checkpoints=[],
            is_on_duty=False,
        )
        self.session.add(profile)
        user.role = UserRole.SECURITY.value
        if data.phone_number:
            user.phone_number = data.phone_number
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(profile)
        await self.cached.invalidate_user(user.id, user.email)

        logger.info(f"Security profile {profile.id} created for user {user_id} with badge {profile.badge_number}")
        return ActionResult.ok(
            "Security profile created successfully! Welcome to the security team.", {"security_id": profile.id}
        )

    async def report_incident(self, user: CurrentUser, data: IncidentReport) -> ActionResult:
        """File an incident against the active event.

        High and critical incidents raise a ``security_alert`` notification for
        every admin.
        """
        reporter = await self.repos.security_personnel.get_by_user_id(user.id)
        if reporter is None:
            raise PermissionDeniedError("Security profile not found")
        incident_type = _require_member(data.incident_type, IncidentType, "incident type")
        severity = _require_member(data.severity, IncidentSeverity, "severity")

        event = await self.repos.events.get_active()
        if event is None:
            raise NotFoundError("No active event found. Cannot submit incident report.")

        incident = SecurityIncident(
            event_id=event.id,
            reported_by=reporter.id,
            incident_type=incident_type,
            severity=severity,
            location=data.location,
            description=data.description,
            involved_persons=data.involved_persons,
            action_taken=data.action_taken or None,
            status=IncidentStatus.OPEN.value,
        )
        incident = await self.repos.incidents.create(incident)
        logger.info(f"Incident {incident.id} ({severity}) reported by {reporter.badge_number}")

        if severity in ALERT_SEVERITIES:
            admins = await self.repos.users.list_by_role(UserRole.ADMIN.value, active_only=True)
            await self.audit.notify_many(
                [admin.id for admin in admins],
                title=f"{severity.capitalize()} security incident",
                message=f"{incident_type.replace('_', ' ')} at {data.location}: {data.description}",
                type=NotificationType.SECURITY_ALERT,
                action_url="/admin/security",
                details={"incident_id": incident.id, "event_id": event.id},
            )

        return ActionResult.ok(
            f"Incident report #{incident.id[:8]} submitted successfully.", {"incident_id": incident.id}
        )

    async def update_incident_status(
        self, incident_id: str, update: IncidentStatusUpdate, user: CurrentUser
    ) -> ActionResult:
        incident = await self.repos.incidents.get_by_id(incident_id)
        if incident is None:
            raise NotFoundError("Incident not found")

        incident.status = _require_member(update.status, IncidentStatus, "status")
        if update.action_taken:
            incident.action_taken = update.action_taken
        if incident.status in CLOSING_STATUSES:
            incident.resolved_by = user.id
            incident.resolved_at = utc_now()
        incident = await self.repos.incidents.update(incident)
        return ActionResult.ok("Incident updated successfully", IncidentRead.model_validate(incident.model_dump()).model_dump(mode="json"))

    async def list_incidents(self, status: Optional[str] = None, limit: int = 100) -> List[IncidentRead]:
        incidents = await self.repos.incidents.list(limit=limit, filters={"status": status})
        return [IncidentRead.model_validate(incident.model_dump()) for incident in incidents]

    async def list_personnel(self) -> List[SecurityPersonnel]:
        return await self.repos.security_personnel.list()
