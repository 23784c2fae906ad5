"""Tests for the log formatter."""

import logging

from shared.logging.logging_setup import ANSI_COLORS, ANSI_RESET, TimezoneFormatter


def _record(level: int, msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("fitplan", level, __file__, 1, msg, ("x",), None)
    record.__dict__.update(extra)
    return record


def test_warning_is_marked_once_across_handlers():
    formatter = TimezoneFormatter(tz_name="UTC", fmt="%(message)s")
    record = _record(logging.WARNING, "retrying %s")

    assert formatter.format(record) == "⚠️ retrying x"
    assert formatter.format(record) == "⚠️ retrying x"


def test_color_only_on_console_formatter():
    record = _record(logging.INFO, "done %s", color="green")

    plain = TimezoneFormatter(tz_name="UTC", fmt="%(message)s").format(record)
    colored = TimezoneFormatter(tz_name="UTC", colored=True, fmt="%(message)s").format(record)

    assert plain == "done x"
    assert colored == f"{ANSI_COLORS['green']}done x{ANSI_RESET}"


def test_timestamps_use_configured_timezone():
    formatter = TimezoneFormatter(tz_name="Asia/Tokyo", fmt="%(asctime)s", datefmt="%H")
    record = _record(logging.INFO, "t")
    record.created = 0

    assert formatter.format(record) == "09"
