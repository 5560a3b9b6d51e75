from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.history_logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="History record written",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extras_in_order() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(water_level=42.0, path="floodHistory", unknown="x"))

    assert line == "History record written | path=floodHistory water_level=42"


def test_formatter_skips_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["status"])

    assert formatter.format(_record(status=None)) == "History record written"
