"""
Tests for structured logging formatters.
"""

import json
import logging
import sys

from medigrid.core.logging import ConsoleFormatter, JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="medigrid.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Analyzed %d symptoms",
        args=(3,),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extras():
    """Test JSON output carries message and extra fields."""
    payload = json.loads(JSONFormatter().format(_record(matches=4, top_condition="asthma")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "medigrid.test"
    assert payload["message"] == "Analyzed 3 symptoms"
    assert payload["matches"] == 4
    assert payload["top_condition"] == "asthma"
    assert "timestamp" in payload


def test_json_formatter_exception():
    """Test exceptions are rendered."""
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))

    assert "ValueError: boom" in payload["exception"]


def test_console_formatter():
    """Test console output lists extras."""
    output = ConsoleFormatter().format(_record(version="2024.1"))

    assert "medigrid.test: Analyzed 3 symptoms" in output
    assert "version=2024.1" in output
