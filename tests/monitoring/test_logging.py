# tests/monitoring/test_logging.py
"""Tests for structured logging functionality."""

import pytest
from structlog.contextvars import get_contextvars

from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    sanitize_event_dict,
    sanitize_headers,
    sanitize_log_message,
)


class TestSanitizeLogMessage:
    """Tests for log message sanitization."""

    def test_newlines_escaped(self) -> None:
        """Newlines should be escaped to prevent log injection."""
        result = sanitize_log_message("Line1\nLine2\rLine3")
        assert result == "Line1\\nLine2\\rLine3"

    def test_null_bytes_removed(self) -> None:
        assert sanitize_log_message("a\x00b") == "ab"

    def test_normal_message_unchanged(self) -> None:
        message = "Post 'hello-world' created by john"
        assert sanitize_log_message(message) == message


class TestSanitizeHeaders:
    @pytest.mark.parametrize("name", ["Authorization", "cookie", "X-API-Key"])
    def test_sensitive_redacted(self, name: str) -> None:
        assert sanitize_headers({name: "secret"})[name] == "[REDACTED]"

    def test_regular_header_kept(self) -> None:
        assert sanitize_headers({"Content-Type": "application/json"}) == {
            "Content-Type": "application/json",
        }


class TestSanitizeEventDict:
    def test_strings_and_headers(self) -> None:
        event = {
            "event": "search\nfor posts",
            "status": 200,
            "headers": {"Authorization": "Bearer token"},
        }

        result = sanitize_event_dict(None, "info", event)

        assert result["event"] == "search\\nfor posts"
        assert result["status"] == 200
        assert result["headers"] == {"Authorization": "[REDACTED]"}


def test_request_id_context() -> None:
    bind_request_id("req-1")
    assert get_contextvars()["request_id"] == "req-1"

    clear_context()
    assert "request_id" not in get_contextvars()
