"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
import sys

from cylc_tree.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="cylc_tree.tree.populate",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Tree populated",
        args=None,
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_nests_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(workflow_id="cylc|one", jobs=3)))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "cylc_tree.tree.populate"
    assert payload["message"] == "Tree populated"
    assert payload["extra"] == {"workflow_id": "cylc|one", "jobs": 3}


def test_configure_logging_replaces_handlers() -> None:
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    try:
        configure_logging("debug")
        configure_logging("warning")

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_json_formatter_without_extra_fields_has_no_extra_key() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "extra" not in payload
    assert set(payload) == {"timestamp", "level", "logger", "message"}


def test_json_formatter_stringifies_values_json_cannot_encode() -> None:
    marker = object()

    payload = json.loads(JsonFormatter().format(_record(node=marker)))

    assert payload["extra"] == {"node": str(marker)}


def test_json_formatter_includes_the_exception() -> None:
    try:
        raise ValueError("bad tree")
    except ValueError:
        record = logging.LogRecord(
            name="cylc_tree",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="failed",
            args=None,
            exc_info=sys.exc_info(),
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "ValueError: bad tree" in payload["exception"]
