"""API tests for the admin back-office."""

from datetime import timedelta

import pytest
import pytest_asyncio

from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import AttendanceRecord, RegistrationStatus, UserRole
from jobfair_hub.server.core.security import create_session_token
from test.unit_test.server.api.conftest import auth_headers

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/admin"


@pytest_asyncio.fixture
async def admin_headers(seed):
    return auth_headers(await seed.user(UserRole.ADMIN))


class TestAccess:
    async def test_non_admin_is_forbidden(self, client, seed):
        response = await client.get(f"{BASE}/dashboard", headers=auth_headers(await seed.user(UserRole.EMPLOYER)))

        assert response.status_code == 403
        assert response.json()["redirect"] == "/dashboard"

    async def test_admin_role_claim_is_checked_against_database(self, client, seed):
        user = await seed.user()
        forged = {"Authorization": f"Bearer {create_session_token(user.id, UserRole.ADMIN)}"}

        response = await client.get(f"{BASE}/dashboard", headers=forged)

        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    async def test_admin_responses_are_not_cached(self, client, admin_headers):
        response = await client.get(f"{BASE}/dashboard", headers=admin_headers)

        assert response.status_code == 200
        assert "no-store" in response.headers["Cache-Control"]


class TestBackOffice:
    async def test_dashboard_health_and_logs(self, client, seed, admin_headers):
        await seed.event()

        dashboard = await client.get(f"{BASE}/dashboard", params={"refresh": True}, headers=admin_headers)
        health = await client.get(f"{BASE}/health", headers=admin_headers)
        logs = await client.get(f"{BASE}/logs", headers=admin_headers)

        assert dashboard.json()["active_events"] == 1
        assert health.json()["status"] == "healthy"
        assert logs.json() == []

    async def test_user_management(self, client, seed, admin_headers):
        user = await seed.user()

        role = await client.patch(f"{BASE}/users/{user.id}/role", json={"role": "security"}, headers=admin_headers)
        listed = await client.get(f"{BASE}/users", params={"role": "security"}, headers=admin_headers)
        toggled = await client.post(f"{BASE}/users/{user.id}/toggle-status", headers=admin_headers)
        details = await client.get(f"{BASE}/users/{user.id}", headers=admin_headers)
        deleted = await client.delete(f"{BASE}/users/{user.id}", headers=admin_headers)
        missing = await client.get(f"{BASE}/users/{user.id}", headers=admin_headers)

        assert role.json()["success"] is True
        assert [u["id"] for u in listed.json()] == [user.id]
        assert toggled.json()["data"] == {"is_active": False}
        assert details.json()["user"]["role"] == "security"
        assert deleted.status_code == 200
        assert missing.status_code == 404

    async def test_invalid_role_is_400(self, client, seed, admin_headers):
        user = await seed.user()
        response = await client.patch(f"{BASE}/users/{user.id}/role", json={"role": "owner"}, headers=admin_headers)
        assert response.status_code == 400

    async def test_employer_verification(self, client, seed, admin_headers):
        pending = await seed.employer(is_verified=False)

        unverified = await client.get(f"{BASE}/employers", params={"is_verified": False}, headers=admin_headers)
        verified = await client.post(f"{BASE}/employers/{pending.id}/verify", headers=admin_headers)
        unknown = await client.post(f"{BASE}/employers/missing/reject", headers=admin_headers)

        assert [e["id"] for e in unverified.json()] == [pending.id]
        assert verified.json()["message"] == "Employer verified successfully"
        assert unknown.status_code == 404

    async def test_job_seeker_approval(self, client, seed, admin_headers):
        first = await seed.job_seeker()
        await seed.job_seeker()

        single = await client.post(f"{BASE}/job-seekers/approve", json={"job_seeker_id": first.id}, headers=admin_headers)
        bulk = await client.post(f"{BASE}/job-seekers/approve-all", headers=admin_headers)
        approved = await client.get(
            f"{BASE}/job-seekers", params={"status": RegistrationStatus.APPROVED.value}, headers=admin_headers
        )

        assert single.json()["success"] is True
        assert bulk.json()["data"] == {"approved_count": 1}
        assert len(approved.json()) == 2

    async def test_approve_without_id(self, client, admin_headers):
        response = await client.post(f"{BASE}/job-seekers/approve", json={}, headers=admin_headers)
        assert response.status_code == 400

    async def test_analytics(self, client, admin_headers):
        attendance = await client.get(f"{BASE}/analytics/attendance", params={"period": "month"}, headers=admin_headers)
        bad_period = await client.get(f"{BASE}/analytics/attendance", params={"period": "year"}, headers=admin_headers)
        users = await client.get(f"{BASE}/analytics/users", headers=admin_headers)

        assert attendance.json() == []
        assert bad_period.status_code == 422
        assert users.json()["role_distribution"] == {"admin": 1}

    async def test_notifications(self, client, seed, admin_headers):
        target = await seed.user()

        created = await client.post(
            f"{BASE}/notifications",
            json={"user_id": target.id, "title": "Welcome", "message": "See you at the fair"},
            headers=admin_headers,
        )
        own = await client.get(f"{BASE}/notifications", headers=admin_headers)
        missing = await client.post(f"{BASE}/notifications/missing/read", headers=admin_headers)

        assert created.status_code == 201
        assert own.json() == []
        assert missing.status_code == 404

    async def test_security_views(self, client, seed, admin_headers):
        guard = await seed.security()

        personnel = await client.get(f"{BASE}/security/personnel", headers=admin_headers)
        incidents = await client.get(f"{BASE}/security/incidents", headers=admin_headers)

        assert [p["id"] for p in personnel.json()] == [guard.id]
        assert incidents.json() == []

    async def test_attendance_fix(self, client, session, seed, admin_headers):
        session.add(AttendanceRecord(job_seeker_id="s", event_id="e", verification_method="pin", verified_by="ghost"))
        await session.commit()

        report = await client.get(f"{BASE}/attendance-records/fix", headers=admin_headers)
        fixed = await client.post(f"{BASE}/attendance-records/fix", json={"apply": True}, headers=admin_headers)

        assert report.json()["invalid_records"] == 1
        assert fixed.json()["fixed"] == 1

    async def test_cache_endpoints(self, client, admin_headers):
        health = await client.get(f"{BASE}/cache/health", headers=admin_headers)
        cleared = await client.post(f"{BASE}/cache/clear", headers=admin_headers)

        assert health.json() == {"healthy": True, "backend": "memory"}
        assert cleared.json()["success"] is True


class TestEvents:
    async def test_event_lifecycle(self, client, admin_headers):
        start = (utc_now() + timedelta(days=30)).replace(microsecond=0)
        payload = {
            "name": "Spring Fair",
            "start_date": start.isoformat(),
            "end_date": (start + timedelta(hours=6)).isoformat(),
            "venue": "Main Campus",
            "is_active": True,
        }

        created = await client.post(f"{BASE}/events", json=payload, headers=admin_headers)
        event_id = created.json()["data"]["event_id"]
        current = await client.get(f"{BASE}/events/current", headers=admin_headers)
        checkpoints = await client.get(f"{BASE}/events/{event_id}/checkpoints", headers=admin_headers)
        updated = await client.patch(f"{BASE}/events/{event_id}", json={"venue": "Annex"}, headers=admin_headers)
        copy = await client.post(f"{BASE}/events/{event_id}/duplicate", json={"new_name": "Fall Fair"}, headers=admin_headers)
        listed = await client.get(f"{BASE}/events", headers=admin_headers)
        stats = await client.get(f"{BASE}/events/{event_id}/stats", headers=admin_headers)
        toggled = await client.post(f"{BASE}/events/{event_id}/toggle", headers=admin_headers)
        deleted = await client.delete(f"{BASE}/events/{event_id}", headers=admin_headers)

        assert created.status_code == 201
        assert current.json()["id"] == event_id
        assert len(checkpoints.json()) == 4
        assert updated.json()["success"] is True
        assert copy.status_code == 201
        assert {e["name"] for e in listed.json()} == {"Spring Fair", "Fall Fair"}
        assert stats.json()["checkpoints"] == 4
        assert toggled.json()["data"] == {"is_active": False}
        assert deleted.status_code == 200

    async def test_invalid_dates(self, client, admin_headers):
        start = utc_now() + timedelta(days=30)
        payload = {
            "name": "Backwards",
            "start_date": start.isoformat(),
            "end_date": (start - timedelta(hours=1)).isoformat(),
            "venue": "Main Campus",
        }

        response = await client.post(f"{BASE}/events", json=payload, headers=admin_headers)

        assert response.status_code == 400

    async def test_delete_event_with_booths_conflicts(self, client, seed, admin_headers):
        event = await seed.event()
        await seed.booth(await seed.employer(), event)

        response = await client.delete(f"{BASE}/events/{event.id}", headers=admin_headers)

        assert response.status_code == 409


class TestBoothAssignments:
    async def test_assignment_flow(self, client, seed, admin_headers):
        event = await seed.event()
        booth = await seed.booth(await seed.employer(company_name="Hooli"), event)
        seeker = await seed.job_seeker(user=await seed.user(name="Ada Park"), status=RegistrationStatus.APPROVED)
        url = f"{BASE}/booth-assignments"

        unassigned = await client.get(f"{url}/unassigned", params={"search": "ada"}, headers=admin_headers)
        booths = await client.get(f"{url}/booths", headers=admin_headers)
        created = await client.post(url, json={"job_seeker_id": seeker.id, "booth_id": booth.id}, headers=admin_headers)
        duplicate = await client.post(url, json={"job_seeker_id": seeker.id, "booth_id": booth.id}, headers=admin_headers)
        assignment_id = created.json()["data"]["assignment_id"]
        listed = await client.get(url, params={"search": "hooli"}, headers=admin_headers)
        confirmed = await client.patch(f"{url}/{assignment_id}/status", json={"status": "confirmed"}, headers=admin_headers)
        stats = await client.get(f"{url}/stats", headers=admin_headers)
        removed = await client.delete(f"{url}/{assignment_id}", headers=admin_headers)

        assert [row["job_seeker"]["id"] for row in unassigned.json()] == [seeker.id]
        assert booths.json()[0]["company_name"] == "Hooli"
        assert created.status_code == 201
        assert duplicate.status_code == 409
        assert [row["id"] for row in listed.json()] == [assignment_id]
        assert confirmed.json()["success"] is True
        assert stats.json()["assignments_by_status"] == {"confirmed": 1}
        assert removed.status_code == 200

    async def test_bulk_assign(self, client, seed, admin_headers):
        event = await seed.event()
        booth = await seed.booth(await seed.employer(), event)
        approved = await seed.job_seeker(status=RegistrationStatus.APPROVED)

        response = await client.post(
            f"{BASE}/booth-assignments/bulk",
            json={"job_seeker_ids": [approved.id, "missing"], "booth_id": booth.id},
            headers=admin_headers,
        )

        assert response.json()["data"]["successful"] == 1
        assert response.json()["data"]["failed"] == 1


class TestBooths:
    async def test_create_edit_and_remove(self, client, seed, admin_headers):
        fair = await seed.event()
        user = await seed.user(UserRole.EMPLOYER)
        await seed.employer(user=user, company_name="Umbrella")

        created = await client.post(
            f"{BASE}/booths",
            json={"event_id": fair.id, "employer_email": user.email, "booth_number": "C3", "location": "Hall C"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        booth_id = created.json()["data"]["booth_id"]

        duplicate = await client.post(
            f"{BASE}/booths",
            json={"event_id": fair.id, "employer_email": user.email, "booth_number": "C3", "location": "Hall D"},
            headers=admin_headers,
        )
        assert duplicate.status_code == 409

        updated = await client.patch(f"{BASE}/booths/{booth_id}", json={"size": "medium"}, headers=admin_headers)
        assert updated.json()["data"]["size"] == "medium"

        toggled = await client.post(f"{BASE}/booths/{booth_id}/toggle", headers=admin_headers)
        assert toggled.json()["data"] == {"is_active": False}

        listed = await client.get(f"{BASE}/booths", params={"event_id": fair.id}, headers=admin_headers)
        assert [b["company_name"] for b in listed.json()] == ["Umbrella"]

        deleted = await client.delete(f"{BASE}/booths/{booth_id}", headers=admin_headers)
        assert deleted.json()["message"] == "Booth deleted successfully"

    async def test_unassigned_booth_is_handed_out_later(self, client, seed, admin_headers):
        fair = await seed.event()
        user = await seed.user(UserRole.EMPLOYER)
        await seed.employer(user=user, company_name="Hooli")

        created = await client.post(
            f"{BASE}/booths/unassigned",
            json={"event_id": fair.id, "booth_number": "U9", "location": "Annex"},
            headers=admin_headers,
        )
        booth_id = created.json()["data"]["booth_id"]

        assigned = await client.post(
            f"{BASE}/booths/{booth_id}/assign", json={"employer_email": user.email}, headers=admin_headers
        )

        assert assigned.status_code == 200
        assert assigned.json()["message"] == "Booth successfully assigned to Hooli"

    async def test_unknown_company_email_is_404(self, client, seed, admin_headers):
        fair = await seed.event()

        response = await client.post(
            f"{BASE}/booths",
            json={"event_id": fair.id, "employer_email": "who@example.com", "booth_number": "Z1", "location": "Hall Z"},
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["message"].startswith("No user found with email: who@example.com")

    async def test_employers_cannot_manage_booths(self, client, seed):
        response = await client.get(f"{BASE}/booths", headers=auth_headers(await seed.user(UserRole.EMPLOYER)))
        assert response.status_code == 403


class TestReports:
    async def test_event_report(self, client, seed, admin_headers):
        await seed.event(name="Winter Fair")
        await seed.employer(industry="Finance")

        response = await client.get(f"{BASE}/reports/event", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["event"]["name"] == "Winter Fair"
        assert body["top_industries"] == [{"industry": "Finance", "count": 1}]

    async def test_no_active_event_is_404(self, client, admin_headers):
        response = await client.get(f"{BASE}/reports/event", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "No active event found."}
