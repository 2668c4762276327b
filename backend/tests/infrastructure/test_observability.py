"""Structured Logging — JSON formatter fields and handler installation.

Tests:
    - Base fields always present
    - Known extra fields surfaced, unknown ones ignored
    - Exceptions rendered under "exception"
    - setup_logging is idempotent (one handler)
"""

import json
import logging
import sys

from qa_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord(
        "qa_api.test", logging.INFO, __file__, 1, msg, None, exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "qa_api.test"
    assert log["message"] == "hello"
    assert "timestamp" in log


def test_known_extras_surfaced_unknown_ignored():
    log = json.loads(JSONFormatter().format(
        _record(status_code=404, path="/answers/1", secret="nope"),
    ))
    assert log["status_code"] == 404
    assert log["path"] == "/answers/1"
    assert "secret" not in log


def test_exception_rendered():
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    log = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in log["exception"]


def test_setup_logging_installs_single_handler():
    before = list(logging.root.handlers)
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert logging.root.level == logging.WARNING
        assert not isinstance(added[0].formatter, JSONFormatter)
    finally:
        for h in logging.root.handlers[:]:
            if h not in before:
                logging.root.removeHandler(h)
