"""
Venue time adapter.

Bookings are entered as a calendar day plus wall-clock times at the venue.
This adapter turns those into UTC instants so they can be compared with the
caller's "now".

Key behaviors:
- combine: calendar day + time-of-day offset, localized to the venue (DST-safe)
- to_local: UTC instant to venue wall-clock time
- Ambiguous wall-clock times (clocks going back) prefer the later occurrence
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo


class VenueTimeAdapter:
    """Time adapter for the venue's IANA timezone."""

    def __init__(self, tz_name: str = "Asia/Jakarta") -> None:
        """
        Initialize with specified timezone.

        Args:
            tz_name: IANA timezone name of the venue

        Raises:
            zoneinfo.ZoneInfoNotFoundError: if the name is unknown
        """
        self._tz_name = tz_name
        self._tz = ZoneInfo(tz_name)

    @property
    def timezone_name(self) -> str:
        return self._tz_name

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def to_local(self, utc_dt: datetime) -> datetime:
        """
        Convert UTC to venue time.

        If utc_dt is naive, it's assumed to be UTC.
        """
        if utc_dt.tzinfo is None:
            utc_dt = utc_dt.replace(tzinfo=UTC)
        return utc_dt.astimezone(self._tz)

    def combine(self, day: date, offset: timedelta) -> datetime:
        """
        Build the UTC instant for a wall-clock time on a venue calendar day.

        Args:
            day: Calendar day at the venue
            offset: Time since local midnight (24h allowed for end of day)

        Returns:
            Datetime in UTC (timezone-aware)
        """
        naive = datetime.combine(day, time.min) + offset
        # fold=1 picks the later occurrence for ambiguous wall-clock times
        local = naive.replace(tzinfo=self._tz, fold=1)
        return local.astimezone(UTC)


def create_venue_time_adapter(tz_name: str = "Asia/Jakarta") -> VenueTimeAdapter:
    """Factory function to create a venue time adapter."""
    return VenueTimeAdapter(tz_name)
