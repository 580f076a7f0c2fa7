"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from gallery_admin.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    configure_logging("DEBUG")

    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")


def test_json_formatter_includes_extra_keys() -> None:
    record = logging.LogRecord("auth", logging.INFO, __file__, 1, "auth.login", None, None)
    record.user_id = 7
    record.request_id = "rid"

    data = json.loads(JSONFormatter().format(record))

    assert data["message"] == "auth.login"
    assert data["user_id"] == 7
    assert data["request_id"] == "rid"


def test_json_formatter_keeps_revoked_count_apart_from_status() -> None:
    record = logging.LogRecord("users", logging.INFO, __file__, 1, "users.deleted", None, None)
    record.user_id = 3
    record.revoked = 2

    data = json.loads(JSONFormatter().format(record))

    assert data["revoked"] == 2
    assert "status" not in data
