"""
Unit tests for the admin back-office service.

Covers admin access checks, user management, employer verification, job
seeker approval, notifications, health and cache operations.
"""

import pytest
import pytest_asyncio

from jobfair_hub.core.database.entities import AttendanceRecord, RegistrationStatus, SystemLog, UserRole
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io.admin import NotificationCreate
from jobfair_hub.server.core.security import CurrentUser
from jobfair_hub.server.services.admin import AdminService, ensure_admin_access
from jobfair_hub.server.services.errors import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
)
from test.unit_test.conftest import as_current_user

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def admin(seed):
    return as_current_user(await seed.user(UserRole.ADMIN, name="Root Admin"))


@pytest_asyncio.fixture
async def service(session, cache, admin):
    return AdminService(session, cache, admin)


class TestEnsureAdminAccess:
    async def test_no_session(self, session):
        with pytest.raises(AuthenticationError):
            await ensure_admin_access(session, None)

    async def test_non_admin(self, session, seed):
        user = as_current_user(await seed.user())
        with pytest.raises(PermissionDeniedError):
            await ensure_admin_access(session, user)

    async def test_token_role_is_not_trusted(self, session, seed):
        user = await seed.user()
        claimed_admin = CurrentUser(id=user.id, role=UserRole.ADMIN)
        with pytest.raises(PermissionDeniedError):
            await ensure_admin_access(session, claimed_admin)

    async def test_inactive_admin(self, session, seed):
        user = as_current_user(await seed.user(UserRole.ADMIN, is_active=False))
        with pytest.raises(PermissionDeniedError):
            await ensure_admin_access(session, user)

    async def test_active_admin(self, session, admin):
        account = await ensure_admin_access(session, admin)
        assert account.id == admin.id


class TestUsers:
    async def test_list_and_details(self, service, seed):
        employer = await seed.employer()
        await seed.user()

        employers = await service.list_users(role="employer")
        details = await service.get_user_details(employer.user_id)

        assert [u["id"] for u in employers] == [employer.user_id]
        assert details["employer"]["id"] == employer.id
        assert details["job_seeker"] is None

    async def test_change_role_is_audited(self, service, session, seed):
        user = await seed.user()

        await service.change_user_role(user.id, "security")

        assert user.role == "security"
        (entry,) = await build_sql_repos_from_session(session=session).system_logs.list()
        assert entry.action == "change_user_role"
        assert entry.details["old_role"] == "job_seeker"

    async def test_change_to_unknown_role(self, service, seed):
        user = await seed.user()
        with pytest.raises(InvalidInputError):
            await service.change_user_role(user.id, "superuser")

    async def test_promote_and_toggle(self, service, seed):
        user = await seed.user()

        await service.promote_user_to_admin(user.id)
        result = await service.toggle_user_status(user.id)

        assert user.role == "admin"
        assert result.message == "User deactivated successfully"
        assert user.is_active is False

    async def test_list_users_reflects_changes(self, service, seed):
        user = await seed.user()
        assert len(await service.list_users(role="security")) == 0

        await service.change_user_role(user.id, "security")

        assert len(await service.list_users(role="security")) == 1

    async def test_delete_user_removes_profiles(self, service, session, seed):
        seeker = await seed.job_seeker()

        await service.delete_user(seeker.user_id)

        repos = build_sql_repos_from_session(session=session)
        assert await repos.users.get_by_id(seeker.user_id) is None
        assert await repos.job_seekers.get_by_id(seeker.id) is None

    async def test_cannot_delete_self_or_admin(self, service, admin, seed):
        other_admin = await seed.user(UserRole.ADMIN)
        with pytest.raises(PermissionDeniedError, match="your own account"):
            await service.delete_user(admin.id)
        with pytest.raises(PermissionDeniedError, match="admin users"):
            await service.delete_user(other_admin.id)

    async def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            await service.toggle_user_status("missing")

    async def test_user_analytics(self, service, seed):
        await seed.user()
        await seed.user(UserRole.EMPLOYER)

        analytics = await service.get_user_analytics()

        assert analytics["role_distribution"] == {"admin": 1, "job_seeker": 1, "employer": 1}
        assert sum(day["count"] for day in analytics["registration_trend"]) == 3


class TestEmployersAndJobSeekers:
    async def test_verify_employer_activates_account(self, service, session, seed):
        user = await seed.user(UserRole.EMPLOYER, is_active=False)
        employer = await seed.employer(user=user, is_verified=False)

        await service.verify_employer(employer.id)

        assert employer.is_verified is True
        assert user.is_active is True

    async def test_reject_employer_deactivates_account(self, service, seed):
        user = await seed.user(UserRole.EMPLOYER)
        employer = await seed.employer(user=user, is_verified=False)

        await service.reject_employer(employer.id)

        assert user.is_active is False
        assert employer.is_verified is False

    async def test_verify_all(self, service, seed):
        await seed.employer(is_verified=False)
        await seed.employer(is_verified=False)
        await seed.employer(is_verified=True)

        result = await service.verify_all_pending_employers()

        assert result.data == {"verified_count": 2}
        assert (await service.verify_all_pending_employers()).message == "No unverified employers found."
        assert len(await service.list_employers(is_verified=True)) == 3

    async def test_approve_job_seeker(self, service, seed):
        seeker = await seed.job_seeker()
        await service.approve_job_seeker(seeker.id)
        assert seeker.registration_status == RegistrationStatus.APPROVED.value

    async def test_approve_requires_id(self, service):
        with pytest.raises(InvalidInputError, match="Job seeker ID is required"):
            await service.approve_job_seeker(None)

    async def test_approve_all(self, service, seed):
        await seed.job_seeker()
        await seed.job_seeker()
        await seed.job_seeker(status=RegistrationStatus.REJECTED)

        result = await service.approve_all_pending_job_seekers()

        assert result.data == {"approved_count": 2}
        assert len(await service.list_job_seekers(registration_status="approved")) == 2
        assert len(await service.list_job_seekers(registration_status="rejected")) == 1


class TestSecurityAndNotifications:
    async def test_security_views(self, service, seed):
        guard = await seed.security(user=await seed.user(UserRole.SECURITY, name="Officer Diaz"))

        (person,) = await service.get_security_personnel()

        assert person["id"] == guard.id
        assert person["name"] == "Officer Diaz"
        assert await service.get_security_incidents() == []

    async def test_notifications(self, service, admin):
        created = await service.create_notification(
            NotificationCreate(user_id=admin.id, title="Reminder", message="Doors open at 9")
        )
        notification_id = created.data["notification_id"]

        assert len(await service.get_notifications(unread_only=True)) == 1
        await service.mark_notification_as_read(notification_id)
        assert await service.get_notifications(unread_only=True) == []

        with pytest.raises(NotFoundError):
            await service.mark_notification_as_read("missing")

    async def test_notification_validation(self, service, admin):
        with pytest.raises(InvalidInputError):
            await service.create_notification(NotificationCreate(user_id=admin.id, title="t", message="m", type="loud"))
        with pytest.raises(NotFoundError):
            await service.create_notification(NotificationCreate(user_id="missing", title="t", message="m"))


class TestSystem:
    async def test_health_degrades_with_failures(self, service, session):
        for _ in range(3):
            session.add(SystemLog(action="sync", resource="system", success=False))
        await session.commit()

        health = await service.get_system_health()

        assert health["score"] == 85
        assert health["status"] == "warning"
        assert health["services"] == {"database": "online", "cache": "online"}

    async def test_healthy_when_no_failures(self, service):
        health = await service.get_system_health()
        assert health["status"] == "healthy"
        assert health["score"] == 100

    async def test_dashboard_stats(self, service, seed):
        await seed.event()
        await seed.employer()

        stats = await service.get_dashboard_stats()

        assert stats["active_events"] == 1
        assert stats["verified_employers"] == 1
        assert stats["total_users"] == 2

    async def test_dashboard_refresh(self, service, seed):
        await service.get_dashboard_stats()
        await seed.user()

        assert (await service.get_dashboard_stats())["total_users"] == 1
        assert (await service.get_dashboard_stats(force_refresh=True))["total_users"] == 2

    async def test_attendance_analytics(self, service, session, seed):
        event = await seed.event()
        seeker = await seed.job_seeker()
        session.add(AttendanceRecord(job_seeker_id=seeker.id, event_id=event.id, verification_method="pin"))
        await session.commit()

        (day,) = await service.get_attendance_analytics("day")
        assert day["count"] == 1

    async def test_logs_and_activity(self, service, admin):
        await service.log_system_action("test_action", "system")

        (entry,) = await service.get_system_logs()
        assert entry["user_name"] == "Root Admin"
        assert len(await service.get_recent_activity()) == 1

    async def test_cache_health_and_clear(self, service):
        assert await service.cache_health() == {"healthy": True, "backend": "memory"}
        result = await service.clear_cache()
        assert result.message == "Cache cleared successfully"
