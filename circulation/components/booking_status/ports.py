"""
Booking status component port definitions.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Protocol


class VenueTimePort(Protocol):
    """Venue calendar used to place booking slots on the UTC timeline."""

    @property
    def tz(self) -> tzinfo:
        """Venue timezone."""
        ...

    def combine(self, day: date, offset: timedelta) -> datetime:
        """UTC instant of a wall-clock offset on a venue calendar day."""
        ...
