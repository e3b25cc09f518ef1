"""
Admin back-office service.

Every entry point is reached only after ``ensure_admin_access`` has
confirmed, against the database, that the caller is an active admin.
Mutations are written to the audit log best-effort.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.cache import CacheManager, InMemoryRedis
from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import (
    Employer,
    JobSeeker,
    Notification,
    NotificationType,
    RegistrationStatus,
    SecurityIncident,
    SecurityPersonnel,
    SystemLog,
    User,
    UserRole,
)
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.admin import NotificationCreate
from jobfair_hub.server.core.security import CurrentUser

from .audit import AuditService
from .cached_queries import CachedQueries
from .errors import AuthenticationError, InvalidInputError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

HEALTH_ERROR_WINDOW = timedelta(hours=1)
REGISTRATION_TREND_DAYS = 30


async def ensure_admin_access(session: AsyncSession, user: Optional[CurrentUser]) -> User:
    """Resolve the caller's account and require it to be an active admin.

    Raises:
        AuthenticationError: There is no session
        PermissionDeniedError: The account is missing, inactive, or not an admin
    """
    if user is None:
        raise AuthenticationError("Authentication required")
    repos = build_sql_repos_from_session(session=session)
    account = await repos.users.get_by_id(user.id)
    if account is None or not account.is_active or account.role != UserRole.ADMIN.value:
        logger.warning(f"Admin access denied for user {user.id}")
        raise PermissionDeniedError("Admin access required")
    return account


class AdminService:
    """Users, employers, job seekers, security and analytics for admins."""

    def __init__(self, session: AsyncSession, cache: CacheManager, admin: CurrentUser):
        self.session = session
        self.admin = admin
        self.repos = build_sql_repos_from_session(session=session)
        self.cached = CachedQueries(session, cache)
        self.audit = AuditService(session)

    async def log_system_action(self, action: str, resource: str, resource_id: Optional[str] = None, **kwargs: Any):
        return await self.audit.log_system_action(self.admin.id, action, resource, resource_id, **kwargs)

    async def _user(self, user_id: str) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def _employer(self, employer_id: str) -> Employer:
        employer = await self.repos.employers.get_by_id(employer_id)
        if employer is None:
            raise NotFoundError("Employer not found")
        return employer

    # ------------------------------------------------------------------
    # Dashboard and audit log
    # ------------------------------------------------------------------

    async def get_dashboard_stats(self, force_refresh: bool = False) -> Dict[str, Any]:
        return await self.cached.get_dashboard_stats(force_refresh=force_refresh)

    async def get_recent_activity(self, limit: int = 10) -> List[SystemLog]:
        return await self.audit.recent_activity(limit)

    async def get_system_logs(self, limit: int = 50) -> List[Dict[str, Any]]:
        stmt = (
            select(SystemLog, User.name, User.email)
            .outerjoin(User, User.id == SystemLog.user_id)
            .order_by(SystemLog.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            {**entry.model_dump(mode="json"), "user_name": name, "user_email": email}
            for entry, name, email in result.all()
        ]

    async def get_system_health(self) -> Dict[str, Any]:
        """Health score from failed audit entries of the last hour, 5 points per failure."""
        since = utc_now() - HEALTH_ERROR_WINDOW
        result = await self.session.execute(
            select(func.count())
            .select_from(SystemLog)
            .where(SystemLog.success == False, SystemLog.created_at >= since)  # noqa: E712
        )
        errors = int(result.scalar_one())
        score = max(0, 100 - errors * 5)
        status = "healthy" if score >= 95 else "warning" if score >= 80 else "critical"
        cache_healthy = await self.cached.cache.health_check()
        return {
            "status": status,
            "score": score,
            "recent_errors": errors,
            "services": {"database": "online", "cache": "online" if cache_healthy else "offline"},
            "last_checked": utc_now().isoformat(),
        }

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def list_users(
        self,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        return await self.cached.get_users(
            {"role": role, "is_active": is_active, "search": search, "limit": limit, "offset": offset}
        )

    async def get_user_details(self, user_id: str) -> Dict[str, Any]:
        user = await self._user(user_id)
        seeker = await self.repos.job_seekers.get_by_user_id(user_id)
        employer = await self.repos.employers.get_by_user_id(user_id)
        activity = await self.repos.system_logs.list(limit=20, filters={"user_id": user_id})
        return {
            "user": user.model_dump(mode="json"),
            "job_seeker": seeker.model_dump(mode="json") if seeker is not None else None,
            "employer": employer.model_dump(mode="json") if employer is not None else None,
            "activity": [entry.model_dump(mode="json") for entry in activity],
        }

    async def change_user_role(self, user_id: str, role: str) -> ActionResult:
        if role not in {member.value for member in UserRole}:
            raise InvalidInputError(f"Invalid role: {role}")
        user = await self._user(user_id)
        old_role = user.role
        user.role = role
        await self.repos.users.update(user)

        await self.log_system_action(
            "change_user_role",
            "user",
            user_id,
            details={"old_role": old_role, "new_role": role, "user_name": user.name, "user_email": user.email},
        )
        await self.cached.invalidate_user(user_id, user.email)
        return ActionResult.ok("User role updated successfully")

    async def promote_user_to_admin(self, user_id: str) -> ActionResult:
        user = await self._user(user_id)
        user.role = UserRole.ADMIN.value
        await self.repos.users.update(user)
        await self.log_system_action("promote_user", "user", user_id, details={"new_role": UserRole.ADMIN.value})
        await self.cached.invalidate_user(user_id, user.email)
        return ActionResult.ok("User promoted to admin successfully")

    async def toggle_user_status(self, user_id: str) -> ActionResult:
        user = await self._user(user_id)
        user.is_active = not user.is_active
        await self.repos.users.update(user)

        await self.log_system_action(
            "activate_user" if user.is_active else "deactivate_user",
            "user",
            user_id,
            details={"user_name": user.name, "user_email": user.email, "new_status": user.is_active},
        )
        await self.cached.invalidate_user(user_id, user.email)
        state = "activated" if user.is_active else "deactivated"
        return ActionResult.ok(f"User {state} successfully", {"is_active": user.is_active})

    async def delete_user(self, user_id: str) -> ActionResult:
        """Delete a user together with their job seeker and employer profiles.

        Raises:
            PermissionDeniedError: The target is the caller or another admin
        """
        if user_id == self.admin.id:
            raise PermissionDeniedError("You cannot delete your own account")
        user = await self._user(user_id)
        if user.role == UserRole.ADMIN.value:
            raise PermissionDeniedError("Cannot delete admin users")

        try:
            for model in (JobSeeker, Employer):
                rows = await self.session.execute(select(model).where(model.user_id == user_id))
                for row in rows.scalars().all():
                    await self.session.delete(row)
            await self.session.delete(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.log_system_action(
            "delete_user",
            "user",
            user_id,
            details={"user_name": user.name, "user_email": user.email, "user_role": user.role},
        )
        await self.cached.invalidate_user(user_id, user.email)
        await self.cached.invalidate_job_seeker(user_id=user_id)
        await self.cached.invalidate_employer()
        return ActionResult.ok("User deleted successfully")

    async def get_user_analytics(self) -> Dict[str, Any]:
        roles = await self.session.execute(select(User.role, func.count()).group_by(User.role))
        since = utc_now() - timedelta(days=REGISTRATION_TREND_DAYS)
        day = func.date(User.created_at)
        trend = await self.session.execute(
            select(day.label("date"), func.count().label("count"))
            .where(User.created_at >= since)
            .group_by(day)
            .order_by(day)
        )
        return {
            "role_distribution": {role: int(total) for role, total in roles.all()},
            "registration_trend": [{"date": str(row.date), "count": int(row.count)} for row in trend.all()],
        }

    async def get_attendance_analytics(self, period: str = "week") -> List[Dict[str, Any]]:
        return await self.cached.get_attendance_analytics(period)

    # ------------------------------------------------------------------
    # Employers
    # ------------------------------------------------------------------

    async def list_employers(self, is_verified: Optional[bool] = None) -> List[Dict[str, Any]]:
        return await self.cached.get_employers({"is_verified": is_verified})

    async def _set_employer_verification(self, employer: Employer, verified: bool) -> None:
        if verified:
            employer.is_verified = True
            employer.updated_at = utc_now()
            self.session.add(employer)
        user = await self.repos.users.get_by_id(employer.user_id)
        if user is not None:
            user.is_active = verified
            user.updated_at = utc_now()
            self.session.add(user)
            await self.cached.invalidate_user(user.id, user.email)

    async def verify_employer(self, employer_id: str) -> ActionResult:
        """Mark the employer verified and activate its user account."""
        employer = await self._employer(employer_id)
        await self._set_employer_verification(employer, True)
        await self.session.commit()

        await self.log_system_action("verify_employer", "employer", employer_id)
        await self.cached.invalidate_employer(employer_id)
        return ActionResult.ok("Employer verified successfully")

    async def reject_employer(self, employer_id: str) -> ActionResult:
        """Deactivate the employer's user account."""
        employer = await self._employer(employer_id)
        await self._set_employer_verification(employer, False)
        await self.session.commit()

        await self.log_system_action("reject_employer", "employer", employer_id)
        await self.cached.invalidate_employer(employer_id)
        return ActionResult.ok("Employer rejected successfully")

    async def verify_all_pending_employers(self) -> ActionResult:
        pending = await self.repos.employers.list_unverified()
        if not pending:
            return ActionResult.ok("No unverified employers found.", {"verified_count": 0})
        for employer in pending:
            await self._set_employer_verification(employer, True)
        await self.session.commit()

        await self.log_system_action(
            "verify_all_employers", "employer", details={"verified_count": len(pending)}
        )
        await self.cached.invalidate_employer()
        return ActionResult.ok(f"Successfully verified {len(pending)} employer(s).", {"verified_count": len(pending)})

    # ------------------------------------------------------------------
    # Job seekers
    # ------------------------------------------------------------------

    async def list_job_seekers(self, registration_status: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self.cached.get_job_seekers({"registration_status": registration_status})

    async def approve_job_seeker(self, job_seeker_id: Optional[str]) -> ActionResult:
        if not job_seeker_id:
            raise InvalidInputError("Job seeker ID is required")
        seeker = await self.repos.job_seekers.get_by_id(job_seeker_id)
        if seeker is None:
            raise NotFoundError("Job seeker not found")
        seeker.registration_status = RegistrationStatus.APPROVED.value
        await self.repos.job_seekers.update(seeker)

        await self.log_system_action("approve_job_seeker", "job_seeker", job_seeker_id)
        await self.cached.invalidate_job_seeker(seeker.id, seeker.user_id)
        return ActionResult.ok("Job seeker approved successfully")

    async def approve_all_pending_job_seekers(self) -> ActionResult:
        pending = await self.repos.job_seekers.list_pending()
        if not pending:
            return ActionResult.ok("No pending job seekers to approve.", {"approved_count": 0})

        await self.session.execute(
            update(JobSeeker)
            .where(JobSeeker.registration_status == RegistrationStatus.PENDING.value)
            .values(registration_status=RegistrationStatus.APPROVED.value, updated_at=utc_now())
        )
        await self.session.commit()

        await self.log_system_action(
            "approve_all_job_seekers", "job_seeker", details={"approved_count": len(pending)}
        )
        await self.cached.invalidate_job_seeker()
        return ActionResult.ok(
            f"Successfully approved {len(pending)} job seeker(s).", {"approved_count": len(pending)}
        )

    # ------------------------------------------------------------------
    # Security
    # ------------------------------------------------------------------

    async def get_security_personnel(self) -> List[Dict[str, Any]]:
        stmt = (
            select(SecurityPersonnel, User.name, User.email, User.is_active)
            .outerjoin(User, User.id == SecurityPersonnel.user_id)
            .order_by(SecurityPersonnel.badge_number.asc())
        )
        result = await self.session.execute(stmt)
        return [
            {**person.model_dump(mode="json"), "name": name, "email": email, "is_active": is_active}
            for person, name, email, is_active in result.all()
        ]

    async def get_security_incidents(self, limit: int = 50) -> List[Dict[str, Any]]:
        stmt = (
            select(SecurityIncident, User.name)
            .outerjoin(SecurityPersonnel, SecurityPersonnel.id == SecurityIncident.reported_by)
            .outerjoin(User, User.id == SecurityPersonnel.user_id)
            .order_by(SecurityIncident.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            {**incident.model_dump(mode="json"), "reported_by_name": name} for incident, name in result.all()
        ]

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def get_notifications(self, unread_only: bool = False, limit: int = 50) -> List[Notification]:
        return await self.repos.notifications.list_for_user(self.admin.id, unread_only=unread_only, limit=limit)

    async def mark_notification_as_read(self, notification_id: str) -> ActionResult:
        if not await self.repos.notifications.mark_read(self.admin.id, notification_id):
            raise NotFoundError("Notification not found")
        return ActionResult.ok("Notification marked as read")

    async def create_notification(self, data: NotificationCreate) -> ActionResult:
        if data.type not in {member.value for member in NotificationType}:
            raise InvalidInputError(f"Invalid notification type: {data.type}")
        await self._user(data.user_id)
        notification = Notification(**data.model_dump())
        notification = await self.repos.notifications.create(notification)
        return ActionResult.ok("Notification created successfully", {"notification_id": notification.id})

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    async def cache_health(self) -> Dict[str, Any]:
        cache = self.cached.cache
        backend = "memory" if isinstance(cache.client, InMemoryRedis) else "redis"
        return {"healthy": await cache.health_check(), "backend": backend}

    async def clear_cache(self) -> ActionResult:
        await self.cached.clear_all()
        await self.log_system_action("clear_cache", "cache")
        return ActionResult.ok("Cache cleared successfully")
