"""Unit tests for session token handling."""

import time
from datetime import timedelta
from unittest.mock import Mock

import pytest
from fastapi import HTTPException
from jose import jwt

from jobfair_hub.core.database.entities import UserRole
from jobfair_hub.server.core.config import settings
from jobfair_hub.server.core.security import (
    CurrentUser,
    create_session_token,
    decode_session_token,
    extract_token,
    get_current_user,
    get_optional_user,
    resolve_identity,
)


def _request(headers=None, cookies=None, state_user=None):
    request = Mock()
    request.headers = headers or {}
    request.cookies = cookies or {}
    request.state = Mock(spec=[])
    if state_user is not None:
        request.state.user = state_user
    return request


class TestTokens:
    def test_round_trip(self):
        token = create_session_token("u1", UserRole.EMPLOYER, email="a@b.c", name="Ann")
        user = decode_session_token(token)
        assert user == CurrentUser(id="u1", role=UserRole.EMPLOYER, email="a@b.c", name="Ann")

    def test_role_given_as_string(self):
        assert decode_session_token(create_session_token("u1", "admin")).is_admin

    def test_expired_token(self):
        token = create_session_token("u1", UserRole.ADMIN, expires_delta=timedelta(seconds=-1))
        assert decode_session_token(token) is None

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "u1", "role": "admin"}, "other-secret", algorithm="HS256")
        assert decode_session_token(token) is None

    def test_missing_subject(self):
        token = jwt.encode({"role": "admin"}, settings.auth.secret, algorithm=settings.auth.algorithm)
        assert decode_session_token(token) is None

    def test_unknown_role(self):
        token = jwt.encode({"sub": "u1", "role": "janitor"}, settings.auth.secret, algorithm=settings.auth.algorithm)
        assert decode_session_token(token) is None

    def test_missing_role_defaults_to_job_seeker(self):
        token = jwt.encode({"sub": "u1"}, settings.auth.secret, algorithm=settings.auth.algorithm)
        assert decode_session_token(token).role == UserRole.JOB_SEEKER

    def test_garbage(self):
        assert decode_session_token("not-a-token") is None

    def test_expiry_defaults_to_twelve_hours(self):
        claims = jwt.get_unverified_claims(create_session_token("u1", UserRole.ADMIN))
        assert abs(claims["exp"] - (time.time() + 12 * 3600)) < 60


class TestExtractToken:
    def test_bearer_header(self):
        assert extract_token(_request(headers={"authorization": "Bearer abc"})) == "abc"

    def test_cookie_fallback(self):
        assert extract_token(_request(cookies={"session_token": "xyz"})) == "xyz"

    def test_other_scheme_ignored(self):
        assert extract_token(_request(headers={"authorization": "Basic abc"})) is None


@pytest.mark.asyncio
class TestDependencies:
    async def test_resolve_identity_anonymous(self):
        assert await resolve_identity(_request()) is None

    async def test_resolve_identity_with_token(self):
        token = create_session_token("u1", UserRole.SECURITY)
        user = await resolve_identity(_request(headers={"authorization": f"Bearer {token}"}))
        assert user.role == UserRole.SECURITY

    async def test_optional_user_prefers_middleware_state(self):
        known = CurrentUser(id="from-state", role=UserRole.ADMIN)
        assert await get_optional_user(_request(state_user=known)) is known

    async def test_current_user_requires_identity(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None)
        assert exc_info.value.status_code == 401

    async def test_current_user_passes_through(self):
        user = CurrentUser(id="u1")
        assert await get_current_user(user) is user
