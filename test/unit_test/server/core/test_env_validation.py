"""Unit tests for startup environment validation."""

import logging

from jobfair_hub.server.core.env_validation import log_environment_status, validate_environment

COMPLETE = {
    "POSTGRES_URL": "postgresql://db",
    "AUTH_SECRET": "secret",
    "AUTH_URL": "http://localhost:3000",
    "REDIS_URL": "redis://cache",
}


def test_complete_environment_is_valid():
    assert validate_environment(COMPLETE) == {"is_valid": True, "missing": [], "warnings": []}


def test_missing_required_variables():
    status = validate_environment({"AUTH_URL": "http://localhost"})
    assert not status["is_valid"]
    assert status["missing"] == ["POSTGRES_URL", "AUTH_SECRET"]


def test_empty_value_counts_as_missing():
    status = validate_environment({**COMPLETE, "AUTH_SECRET": ""})
    assert status["missing"] == ["AUTH_SECRET"]


def test_missing_redis_is_a_warning():
    env = {key: value for key, value in COMPLETE.items() if key != "REDIS_URL"}
    status = validate_environment(env)
    assert status["is_valid"]
    assert status["warnings"] == ["Redis not configured - using in-memory cache"]


def test_log_environment_status_logs_missing(caplog):
    with caplog.at_level(logging.INFO, logger="jobfair_hub.server.core.env_validation"):
        status = log_environment_status({})
    assert not status["is_valid"]
    assert "Missing required environment variables" in caplog.text
    assert "Redis not configured" in caplog.text
