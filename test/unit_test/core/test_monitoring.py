"""Unit tests for the monitoring helpers."""

from unittest.mock import patch

import pytest

from jobfair_hub.core import monitoring


class TestInitializeLogfire:
    def test_disabled_does_not_configure(self):
        with patch.object(monitoring, "LOGFIRE_ENABLED", False), patch.object(monitoring, "logfire") as mock_logfire:
            monitoring.initialize_logfire()
        mock_logfire.configure.assert_not_called()
        assert not monitoring.is_logfire_active()

    def test_enabled_without_token_does_not_configure(self):
        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(
            monitoring, "LOGFIRE_TOKEN", ""
        ), patch.object(monitoring, "logfire") as mock_logfire:
            monitoring.initialize_logfire()
        mock_logfire.configure.assert_not_called()


class TestLoggingHelpersWithoutLogfire:
    """Without an active Logfire session the helpers only write debug logs."""

    @pytest.fixture(autouse=True)
    def inactive(self):
        with patch.object(monitoring, "_logfire_active", False), patch.object(monitoring, "logfire") as mock_logfire:
            yield mock_logfire

    def test_log_api_request(self, inactive):
        monitoring.log_api_request("GET", "/api/v1/admin/dashboard", 200, 12.5)
        inactive.info.assert_not_called()

    def test_log_check_in(self, inactive):
        monitoring.log_check_in("js-1", "ev-1", "pin", False, None)
        inactive.info.assert_not_called()

    def test_log_rate_limited(self, inactive):
        monitoring.log_rate_limited("1.2.3.4:admin", "/api/v1/admin", 100)
        inactive.warn.assert_not_called()

    def test_log_error(self, inactive):
        monitoring.log_error("ValueError", "boom", {"path": "/"})
        inactive.error.assert_not_called()


class TestLoggingHelpersWithLogfire:
    @pytest.fixture(autouse=True)
    def active(self):
        with patch.object(monitoring, "_logfire_active", True), patch.object(monitoring, "logfire") as mock_logfire:
            yield mock_logfire

    def test_log_check_in_sends_event(self, active):
        monitoring.log_check_in("js-1", "ev-1", "ticket_number", True, "sec-1")
        active.info.assert_called_once()
        kwargs = active.info.call_args.kwargs
        assert kwargs["duplicate"] is True
        assert kwargs["verified_by"] == "sec-1"

    def test_log_rate_limited_sends_warning(self, active):
        monitoring.log_rate_limited("1.2.3.4:admin", "/api/v1/admin", 100)
        active.warn.assert_called_once()

    def test_log_error_passes_context(self, active):
        monitoring.log_error("ValueError", "boom", {"path": "/x"})
        active.error.assert_called_once_with("ValueError: boom", path="/x")


def test_enabled_with_token_configures_and_instruments():
    with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(
        monitoring, "LOGFIRE_TOKEN", "token"
    ), patch.object(monitoring, "_logfire_active", False), patch.object(monitoring, "logfire") as mock_logfire:
        app = object()
        monitoring.initialize_logfire(app)
        assert monitoring.is_logfire_active()

    mock_logfire.configure.assert_called_once()
    mock_logfire.instrument_fastapi.assert_called_once_with(app=app)
    assert not monitoring.is_logfire_active()
