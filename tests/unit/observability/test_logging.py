"""Unit tests for the logging helpers."""
from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from broker_auth.observability.logging import (
    DEFAULT_SENSITIVE_FIELDS,
    JsonLoggerFactory,
    SensitiveFieldsFilter,
    get_logger,
)


class TestSensitiveFieldsFilter:
    def test_redacts_default_fields(self) -> None:
        out = SensitiveFieldsFilter().redact({"username": "alice", "password": "pw", "Secret": "s"})
        assert out == {"username": "alice", "password": "[REDACTED]", "Secret": "[REDACTED]"}

    def test_redact_deep(self) -> None:
        out = SensitiveFieldsFilter().redact_deep({"row": {"name": "bob", "stored_secret": "x"}})
        assert out == {"row": {"name": "bob", "stored_secret": "[REDACTED]"}}

    def test_custom_fields(self) -> None:
        out = SensitiveFieldsFilter(frozenset({"pin"})).redact({"pin": "1234", "password": "pw"})
        assert out == {"pin": "[REDACTED]", "password": "pw"}

    def test_processor_interface(self) -> None:
        event = SensitiveFieldsFilter()(None, "info", {"event": "login", "token": "t"})
        assert event == {"event": "login", "token": "[REDACTED]"}

    def test_defaults_cover_secrets(self) -> None:
        assert {"password", "presented_secret", "stored_secret"} <= DEFAULT_SENSITIVE_FIELDS


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger("broker_auth.test", component="authz").info("hello", count=1)
        assert logs == [{"component": "authz", "count": 1, "event": "hello", "log_level": "info"}]


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonLoggerFactory:
    def test_json_output_is_redacted(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(level=logging.DEBUG)
        structlog.get_logger("broker_auth.json").info("credential_checked", username="alice", password="pw")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "credential_checked"
        assert payload["username"] == "alice"
        assert payload["password"] == "[REDACTED]"
        assert payload["level"] == "info"
