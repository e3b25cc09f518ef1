"""API tests for check-in verification and security staff endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio

from jobfair_hub.core.credentials import generate_qr_code_data
from jobfair_hub.core.database.entities import UserRole
from jobfair_hub.core.database.repositories import AttendanceRecordRepository, build_sql_repos_from_session
from test.unit_test.server.api.conftest import auth_headers

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/security"


@pytest_asyncio.fixture
async def guard(seed):
    user = await seed.user(UserRole.SECURITY)
    personnel = await seed.security(user=user)
    return personnel, auth_headers(user)


class TestAccess:
    async def test_anonymous_gets_login_redirect(self, client):
        response = await client.post(f"{BASE}/verify/pin", json={"pin": "123456"})

        assert response.status_code == 401
        assert response.json()["redirect"] == "/login?callbackUrl=/api/v1/security/verify/pin"

    async def test_job_seeker_is_forbidden(self, client, seed):
        user = await seed.user()
        response = await client.post(f"{BASE}/verify/pin", json={"pin": "123456"}, headers=auth_headers(user))
        assert response.status_code == 403

    async def test_invalid_token_is_anonymous(self, client):
        response = await client.get(f"{BASE}/stats", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestVerification:
    async def test_pin_check_in(self, client, seed, session, guard):
        personnel, headers = guard
        await seed.event()
        seeker = await seed.job_seeker()

        response = await client.post(f"{BASE}/verify/pin", json={"pin": seeker.pin}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["attendee"]["id"] == seeker.id
        (record,) = await build_sql_repos_from_session(session=session).attendance.list()
        assert record.verified_by == personnel.id

    async def test_duplicate_check_in_still_succeeds(self, client, seed, guard):
        _, headers = guard
        await seed.event()
        seeker = await seed.job_seeker()

        await client.post(f"{BASE}/verify/pin", json={"pin": seeker.pin}, headers=headers)
        response = await client.post(f"{BASE}/verify/pin", json={"pin": seeker.pin}, headers=headers)

        assert response.status_code == 200
        assert response.json()["attendee"]["already_checked_in"] is True

    @pytest.mark.parametrize(
        "path,payload,status_code",
        [
            ("verify/pin", {"pin": "12"}, 400),
            ("verify/pin", {"pin": "999999"}, 404),
            ("verify/ticket", {"ticket_number": "HCS-2025-1"}, 400),
            ("verify/ticket", {"ticket_number": "HCS-2025-99999999"}, 404),
            ("verify/qr", {"qr_data": "{}"}, 400),
        ],
    )
    async def test_failure_status_codes(self, client, seed, guard, path, payload, status_code):
        _, headers = guard
        await seed.event()

        response = await client.post(f"{BASE}/{path}", json=payload, headers=headers)

        assert response.status_code == status_code
        assert response.json()["success"] is False

    async def test_no_active_event_is_409(self, client, seed, guard):
        _, headers = guard
        seeker = await seed.job_seeker()

        response = await client.post(f"{BASE}/verify/ticket", json={"ticket_number": seeker.ticket_number}, headers=headers)

        assert response.status_code == 409

    async def test_qr_check_in(self, client, seed, guard):
        _, headers = guard
        await seed.event()
        seeker = await seed.job_seeker()
        qr_data = generate_qr_code_data(seeker.ticket_number, seeker.pin, "HCS2025")

        response = await client.post(f"{BASE}/verify/qr", json={"qr_data": qr_data}, headers=headers)

        assert response.status_code == 200

    async def test_admin_check_in_has_no_verifier(self, client, seed, session):
        admin = await seed.user(UserRole.ADMIN)
        await seed.event()
        seeker = await seed.job_seeker()

        response = await client.post(f"{BASE}/verify/pin", json={"pin": seeker.pin}, headers=auth_headers(admin))

        assert response.status_code == 200
        (record,) = await build_sql_repos_from_session(session=session).attendance.list()
        assert record.verified_by is None

    async def test_forwarded_client_address_is_recorded(self, client, seed, session, guard):
        _, headers = guard
        await seed.event()
        seeker = await seed.job_seeker()

        response = await client.post(
            f"{BASE}/verify/pin",
            json={"pin": seeker.pin},
            headers={**headers, "X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "gate-scanner/2"},
        )

        assert response.status_code == 200
        (record,) = await build_sql_repos_from_session(session=session).attendance.list()
        assert record.ip_address == "203.0.113.7"
        assert record.device_info == "gate-scanner/2"

    async def test_storage_failure_is_500(self, client, seed, session, guard):
        _, headers = guard
        await seed.event()
        seeker = await seed.job_seeker()

        with patch.object(AttendanceRecordRepository, "create", AsyncMock(side_effect=RuntimeError("disk full"))):
            response = await client.post(f"{BASE}/verify/pin", json={"pin": seeker.pin}, headers=headers)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Verification failed due to system error. Please try again.",
            "attendee": None,
        }
        assert await build_sql_repos_from_session(session=session).attendance.list() == []


class TestStaff:
    async def test_history_and_stats(self, client, seed, guard):
        _, headers = guard
        event = await seed.event()
        seeker = await seed.job_seeker()
        await client.post(f"{BASE}/verify/pin", json={"pin": seeker.pin}, headers=headers)

        history = await client.get(f"{BASE}/attendance", params={"event_id": event.id}, headers=headers)
        stats = await client.get(f"{BASE}/stats", headers=headers)

        assert [item["job_seeker_id"] for item in history.json()] == [seeker.id]
        assert stats.json() == {"today_check_ins": 1, "my_check_ins": 1, "open_incidents": 0}

    async def test_any_user_can_set_up_security_profile(self, client, seed):
        user = await seed.user()

        response = await client.post(f"{BASE}/setup", json={"badge_number": "SEC-777"}, headers=auth_headers(user))

        assert response.status_code == 201
        assert response.json()["data"]["security_id"]

    async def test_report_and_resolve_incident(self, client, seed, guard):
        _, headers = guard
        await seed.event()

        reported = await client.post(
            f"{BASE}/incidents",
            json={"incident_type": "technical_issue", "severity": "medium", "location": "Gate 1", "description": "Scanner down"},
            headers=headers,
        )
        incident_id = reported.json()["data"]["incident_id"]
        resolved = await client.patch(f"{BASE}/incidents/{incident_id}", json={"status": "resolved"}, headers=headers)

        assert reported.status_code == 201
        assert resolved.json()["data"]["status"] == "resolved"

    async def test_incident_without_event(self, client, guard):
        _, headers = guard
        response = await client.post(
            f"{BASE}/incidents",
            json={"incident_type": "other", "severity": "low", "location": "Lobby", "description": "Lost badge"},
            headers=headers,
        )
        assert response.status_code == 404
