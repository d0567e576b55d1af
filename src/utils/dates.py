"""
Date helpers for project timelines.

Parsing is deliberately lenient: anything that cannot be read as a date
comes back as None so callers can treat it as "not started".
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

DateLike = Union[str, date, datetime, None]

SECONDS_PER_DAY = 24 * 60 * 60


def _read_datetime(value: DateLike) -> Optional[datetime]:
    """Parse to an aware datetime, keeping any UTC offset the value carries."""
    if value is None:
        return None
    
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_datetime(value: DateLike) -> Optional[datetime]:
    """
    Parse a date-like value into an aware UTC datetime.
    
    Date-only values (``2024-01-01`` or ``date`` objects) become midnight UTC.
    Naive datetimes are assumed to be UTC.
    
    Returns:
        The parsed datetime, or None for empty or unparseable input
    """
    parsed = _read_datetime(value)
    return parsed.astimezone(timezone.utc) if parsed else None


def parse_date(value: DateLike) -> Optional[date]:
    """Parse a date-like value into a calendar date (UTC), or None."""
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def parse_local_date(value: DateLike) -> Optional[date]:
    """
    Calendar date as written, in the value's own UTC offset.
    
    ``2024-01-01T23:00:00-05:00`` is 2024-01-01 here but 2024-01-02 for
    ``parse_date``.
    """
    parsed = _read_datetime(value)
    return parsed.date() if parsed else None


def days_between(start: DateLike, end: DateLike = None) -> Optional[int]:
    """
    Whole days between two instants, rounded up.
    
    Uses the absolute difference, so the order of the arguments does not
    matter. ``end`` defaults to now.
    
    Returns:
        Day count, or None if either value cannot be parsed
    """
    start_dt = parse_datetime(start)
    end_dt = parse_datetime(end) if end is not None else datetime.now(timezone.utc)
    if start_dt is None or end_dt is None:
        return None
    
    seconds = abs((end_dt - start_dt).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def add_days(value: date, days: int) -> date:
    """Shift a calendar date by a number of days."""
    return value + timedelta(days=days)


def format_date(value: DateLike, style: str = "short") -> str:
    """
    Format a date for display.
    
    Styles:
        short:    "Jan 5, 2024"
        long:     "Friday, January 5, 2024"
        relative: "Jan 5"
    
    Dates are shown as written, without converting to UTC.
    """
    if value is None or value == "":
        return "Not set"
    
    parsed = _read_datetime(value)
    if parsed is None:
        return "Invalid date"
    
    if style == "long":
        return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year}"
    if style == "relative":
        return f"{parsed:%b} {parsed.day}"
    return f"{parsed:%b} {parsed.day}, {parsed.year}"
