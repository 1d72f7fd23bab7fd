"""
Temporal component - Normalization of date-like and money-like record fields.

Every parser is total: unusable input yields the Invalid sentinel instead of
raising, and Invalid is never coerced to epoch or to now.
"""

from .component import (
    ensure_utc,
    is_valid,
    parse_amount,
    parse_calendar_day,
    parse_instant,
    parse_time_of_day,
)
from .models import ABSENT, MALFORMED, Invalid, InvalidReason, MaybeAmount, MaybeInstant

__all__ = [
    # Parsers
    "ensure_utc",
    "is_valid",
    "parse_amount",
    "parse_calendar_day",
    "parse_instant",
    "parse_time_of_day",
    # Models
    "ABSENT",
    "MALFORMED",
    "Invalid",
    "InvalidReason",
    "MaybeAmount",
    "MaybeInstant",
]
