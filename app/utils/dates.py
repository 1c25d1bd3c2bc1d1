"""Datetime helpers."""

from __future__ import annotations

import math
from datetime import date

import pendulum
from pendulum.parsing.exceptions import ParserError

UTC = "UTC"


def utc_now() -> pendulum.DateTime:
    return pendulum.now(UTC)


def utc_now_iso() -> str:
    return utc_now().to_iso8601_string()


def parse_timestamp(value: object) -> pendulum.DateTime | None:
    """Parse a captured timestamp into a UTC datetime.

    ISO-8601 strings and epoch milliseconds are accepted. Anything else
    returns ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return pendulum.from_timestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = pendulum.parse(value.strip(), tz=UTC)
    except (ValueError, ParserError):
        return None
    if not isinstance(parsed, pendulum.DateTime):
        if isinstance(parsed, date):
            return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=UTC)
        return None
    return parsed.in_timezone(UTC)


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def utc_date_key(value: pendulum.DateTime) -> str:
    return format_date(value.in_timezone(UTC).date())
