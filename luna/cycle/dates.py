"""Local-calendar date helpers for the cycle engine.

Every date in Luna is a plain calendar day in the user's local calendar,
serialized as ``YYYY-MM-DD``.  Nothing here converts to UTC: a datetime is
reduced to its own year/month/day fields, so a late-evening timestamp never
slides onto the next (or previous) day.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

logger = logging.getLogger("luna.cycle.dates")


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    return value


def today() -> date:
    """Return the wall-clock local date."""
    return date.today()


def format_date(value: date | datetime) -> str:
    """Format a date as ``YYYY-MM-DD`` from its local year/month/day fields.

    Args:
        value: A date, or a datetime whose calendar day is used as-is.

    Returns:
        Zero-padded ISO calendar date string.
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date(text: str | None, fallback: date | None = None) -> date:
    """Parse a ``YYYY-MM-DD`` string into a local calendar date.

    Fails closed: empty or malformed input returns ``fallback`` (normally
    the current reference date), or today when no fallback is given.

    Args:
        text:     Date string such as ``"2024-01-06"``.
        fallback: Date to substitute for unusable input.

    Returns:
        The parsed date, or the fallback.
    """
    substitute = fallback or today()
    if not text or not text.strip():
        return substitute

    parts = text.strip().split("-")
    try:
        if len(parts) != 3:
            raise ValueError(f"expected 3 components, got {len(parts)}")
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError as exc:
        logger.warning("Unparseable date %r (%s); using %s", text, exc, substitute)
        return substitute


def days_between(a: date | datetime, b: date | datetime) -> int:
    """Return the whole-day difference ``a - b``.

    Time-of-day components are dropped before subtracting, so the result
    is always an exact integer with no daylight-saving drift.
    """
    return (_as_date(a) - _as_date(b)).days


def add_days(value: date | datetime, days: int) -> date:
    """Return the calendar day ``days`` after (or before, if negative) ``value``."""
    return _as_date(value) + timedelta(days=days)
