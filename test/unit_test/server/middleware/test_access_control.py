"""Unit tests for the access control middleware."""

import asyncio
from typing import Optional

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from jobfair_hub.core.database.entities import UserRole
from jobfair_hub.server.core.security import CurrentUser
from jobfair_hub.server.middleware.access_control import (
    AccessControlMiddleware,
    find_rule,
    is_public_path,
    login_redirect,
)

pytestmark = pytest.mark.asyncio

PATHS = [
    "/health",
    "/api/v1/admin/dashboard",
    "/api/v1/employer/setup",
    "/api/v1/employer/booth",
    "/api/v1/security/setup",
    "/api/v1/security/verify/pin",
    "/api/v1/registration/pin/verify",
    "/api/v1/notifications",
]


def _build_app(user: Optional[CurrentUser] = None, resolver=None, timeout: float = 1.0) -> FastAPI:
    async def resolve(request: Request) -> Optional[CurrentUser]:
        return user

    app = FastAPI()
    app.add_middleware(AccessControlMiddleware, identity_resolver=resolver or resolve, timeout_seconds=timeout)

    for path in PATHS:

        async def endpoint(request: Request):
            state_user = getattr(request.state, "user", None)
            return {"user": state_user.id if state_user else None}

        app.add_api_route(path, endpoint, methods=["GET"])
    return app


async def _get(app: FastAPI, path: str):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        return await client.get(path)


def _user(role: UserRole) -> CurrentUser:
    return CurrentUser(id=f"{role.value}-1", role=role)


class TestHelpers:
    @pytest.mark.parametrize(
        "path,public",
        [
            ("/health", True),
            ("/api/v1/docs", True),
            ("/api/v1/registration/pin/verify", True),
            ("/dashboard", True),
            ("/api/v1/admin", False),
            ("/api/v1/security/verify/pin", False),
        ],
    )
    def test_is_public_path(self, path, public):
        assert is_public_path(path) is public

    def test_most_specific_rule_wins(self):
        assert find_rule("/api/v1/security/setup").roles is None
        assert find_rule("/api/v1/security/verify/pin").roles == frozenset({UserRole.SECURITY, UserRole.ADMIN})
        assert find_rule("/api/v1/administrator").prefix == "/api/v1"

    def test_login_redirect_keeps_callback(self):
        assert login_redirect("/api/v1/admin") == "/login?callbackUrl=/api/v1/admin"


async def test_public_path_needs_no_identity():
    response = await _get(_build_app(), "/health")
    assert response.status_code == 200
    assert response.headers["X-Frame-Options"] == "DENY"


async def test_anonymous_api_request_gets_401_with_redirect():
    response = await _get(_build_app(), "/api/v1/notifications")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["redirect"] == "/login?callbackUrl=/api/v1/notifications"


async def test_signed_in_user_is_put_on_request_state():
    response = await _get(_build_app(_user(UserRole.JOB_SEEKER)), "/api/v1/notifications")
    assert response.status_code == 200
    assert response.json() == {"user": "job_seeker-1"}


@pytest.mark.parametrize(
    "role,path,expected",
    [
        (UserRole.JOB_SEEKER, "/api/v1/admin/dashboard", 403),
        (UserRole.EMPLOYER, "/api/v1/admin/dashboard", 403),
        (UserRole.ADMIN, "/api/v1/admin/dashboard", 200),
        (UserRole.JOB_SEEKER, "/api/v1/employer/booth", 403),
        (UserRole.EMPLOYER, "/api/v1/employer/booth", 200),
        (UserRole.ADMIN, "/api/v1/employer/booth", 200),
        (UserRole.EMPLOYER, "/api/v1/security/verify/pin", 403),
        (UserRole.SECURITY, "/api/v1/security/verify/pin", 200),
        (UserRole.ADMIN, "/api/v1/security/verify/pin", 200),
        (UserRole.JOB_SEEKER, "/api/v1/security/setup", 200),
    ],
)
async def test_role_rules(role, path, expected):
    response = await _get(_build_app(_user(role)), path)
    assert response.status_code == expected


async def test_forbidden_points_to_dashboard():
    response = await _get(_build_app(_user(UserRole.JOB_SEEKER)), "/api/v1/admin/dashboard")
    assert response.json()["redirect"] == "/dashboard"


async def test_admin_area_is_not_cached():
    response = await _get(_build_app(_user(UserRole.ADMIN)), "/api/v1/admin/dashboard")
    assert "no-store" in response.headers["Cache-Control"]


class TestCompanyOnboarding:
    async def test_job_seeker_needs_onboarding_flag(self):
        response = await _get(_build_app(_user(UserRole.JOB_SEEKER)), "/api/v1/employer/setup")
        assert response.status_code == 403

    async def test_job_seeker_from_onboarding_is_allowed(self):
        response = await _get(_build_app(_user(UserRole.JOB_SEEKER)), "/api/v1/employer/setup?from=company-onboard")
        assert response.status_code == 200

    async def test_employer_is_allowed(self):
        response = await _get(_build_app(_user(UserRole.EMPLOYER)), "/api/v1/employer/setup")
        assert response.status_code == 200


async def test_identity_timeout_gives_401():
    async def slow(request):
        await asyncio.sleep(1)

    response = await _get(_build_app(resolver=slow, timeout=0.01), "/api/v1/notifications")
    assert response.status_code == 401
    assert response.json()["message"] == "Authentication timed out"


async def test_resolver_failure_lets_request_through_with_marker():
    async def broken(request):
        raise RuntimeError("identity provider down")

    response = await _get(_build_app(resolver=broken), "/api/v1/notifications")
    assert response.status_code == 200
    assert response.headers["X-Middleware-Error"] == "true"
    assert response.headers["X-Error-Type"] == "RuntimeError"
