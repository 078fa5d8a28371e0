"""Tests for structured logging."""

import json
import logging

import lib.amino.logging as amino_logging
from lib.amino.logging import JsonFormatter, TextFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("lib.amino", logging.WARNING, __file__, 1, "Unable to parse %s", ("memory",), None)
    for name, value in extra.items():
        setattr(record, name, value)
    return record


def test_json_formatter_fields() -> None:
    """Test JSON output carries extra fields."""
    data = json.loads(JsonFormatter().format(_record(device_ip="10.231.64.92", field="memory")))
    assert data["level"] == "WARNING"
    assert data["message"] == "Unable to parse memory"
    assert data["device_ip"] == "10.231.64.92"
    assert data["field"] == "memory"
    assert "command" not in data


def test_text_formatter_prefix() -> None:
    """Test text output is prefixed with the device IP."""
    record = _record(device_ip="10.231.64.92")
    line = TextFormatter().format(record)
    assert "[WARNING] [10.231.64.92] Unable to parse memory" in line
    # The record itself is left untouched for other handlers
    assert record.getMessage() == "Unable to parse memory"


def test_text_formatter_without_device() -> None:
    """Test text output without a device IP."""
    assert TextFormatter().format(_record()).endswith("[WARNING] Unable to parse memory")


def test_json_formatter_known_fields_only() -> None:
    """Test JSON output keeps to the fields the package logs."""
    data = json.loads(JsonFormatter().format(_record(device_ip="10.231.64.92", duration=1.5)))
    assert set(data) == {"timestamp", "level", "logger", "message", "device_ip"}


def test_log_helpers() -> None:
    """Test the helper set matches the levels in use."""
    for name in ("log_debug", "log_info", "log_warn", "log_error"):
        assert callable(getattr(amino_logging, name))
    assert not hasattr(amino_logging, "log_success")
