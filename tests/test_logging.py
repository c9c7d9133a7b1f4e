"""Tests for the JSON log formatter."""

import json
import logging

import pytest

from src.shared.infrastructure.logging import REDACTED, CustomJsonFormatter


pytestmark = pytest.mark.unit


def _format(**extra) -> dict:
    formatter = CustomJsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        environment="test",
    )
    record = logging.LogRecord("users", logging.INFO, __file__, 1, "User created", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


def test_formatter_emits_json_with_context() -> None:
    payload = _format(correlation_id="abc", user_id="42")

    assert payload["message"] == "User created"
    assert payload["correlation_id"] == "abc"
    assert payload["environment"] == "test"
    assert payload["user_id"] == "42"
    assert payload["timestamp"]


def test_formatter_redacts_sensitive_fields() -> None:
    payload = _format(db_password="hunter2", access_token="t0k3n")

    assert payload["db_password"] == REDACTED
    assert payload["access_token"] == REDACTED
