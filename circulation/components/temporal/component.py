"""
Temporal component.

Pure parsers for the date-like, time-of-day and money fields of loan and
booking records. None of these functions raise on record data.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Any

from .models import ABSENT, MALFORMED, Invalid, MaybeAmount, MaybeInstant

_TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_CALENDAR_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid(value: object) -> bool:
    """True unless value is the Invalid sentinel."""
    return not isinstance(value, Invalid)


def ensure_utc(now: datetime) -> datetime:
    """
    Normalize the caller's "now" to an aware UTC datetime.

    Naive values are taken as UTC. Anything other than a datetime is a
    programming error and raises TypeError.
    """
    if not isinstance(now, datetime):
        raise TypeError(f"now must be a datetime, got {type(now).__name__}")
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now.astimezone(UTC)


def parse_instant(value: Any) -> MaybeInstant:
    """
    Parse a timestamp field into an aware UTC datetime.

    Accepts ISO-8601 strings (a trailing "Z" is fine), datetime and date
    values. Naive values are taken as UTC; a bare date is midnight UTC.

    Returns:
        Aware UTC datetime, or Invalid("absent") / Invalid("malformed")
    """
    if value is None:
        return ABSENT

    if isinstance(value, datetime):
        return _to_utc(value)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ABSENT
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return MALFORMED
        return _to_utc(parsed)

    return MALFORMED


def parse_calendar_day(value: Any, tz: tzinfo) -> date | Invalid:
    """
    Parse a booking's calendar day.

    A plain "YYYY-MM-DD" (or a date) is used as is. A full timestamp with an
    offset is converted to the venue timezone first, so "2025-03-09T17:00Z"
    is the 10th in Jakarta.
    """
    if value is None:
        return ABSENT

    if isinstance(value, datetime):
        return _venue_day(value, tz)

    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        return MALFORMED

    text = value.strip()
    if not text:
        return ABSENT

    try:
        if _CALENDAR_DAY.match(text):
            return date.fromisoformat(text)
        return _venue_day(datetime.fromisoformat(text), tz)
    except (ValueError, OverflowError):
        return MALFORMED


def parse_time_of_day(value: Any, allow_end_of_day: bool = True) -> timedelta | Invalid:
    """
    Parse an "HH:MM" (or "HH:MM:SS") wall-clock time.

    Returns the offset from local midnight. "24:00" is accepted as the end of
    the day when allow_end_of_day is set.
    """
    if value is None:
        return ABSENT

    if isinstance(value, time):
        return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second)

    if not isinstance(value, str):
        return MALFORMED

    text = value.strip()
    if not text:
        return ABSENT

    match = _TIME_OF_DAY.match(text)
    if match is None:
        return MALFORMED

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3) or 0)

    if hours == 24 and minutes == 0 and seconds == 0:
        return timedelta(hours=24) if allow_end_of_day else MALFORMED

    if hours > 23 or minutes > 59 or seconds > 59:
        return MALFORMED

    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def parse_amount(value: Any) -> MaybeAmount:
    """
    Parse a money field (smallest currency unit).

    Only non-negative integers are valid. Integral floats such as 5000.0 are
    accepted because JSON decoders produce them; fractional, negative,
    non-finite and boolean values are malformed.
    """
    if value is None:
        return ABSENT

    if isinstance(value, bool):
        return MALFORMED

    if isinstance(value, int):
        return value if value >= 0 else MALFORMED

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer() or value < 0:
            return MALFORMED
        return int(value)

    return MALFORMED


def _to_utc(value: datetime) -> MaybeInstant:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    try:
        return value.astimezone(UTC)
    except (OverflowError, ValueError):
        return MALFORMED


def _venue_day(value: datetime, tz: tzinfo) -> date | Invalid:
    if value.tzinfo is None:
        return value.date()
    try:
        return value.astimezone(tz).date()
    except (OverflowError, ValueError):
        return MALFORMED
