"""
Booking status component.

Pure derivation of a room booking's display status
(pending_payment / confirmed / completed / cancelled).

Precedence:
1. raw "cancelled" is terminal; a stored "completed" is kept (flagged)
2. without a valid end instant (day + end time at the venue) the raw status
   is shown unchanged
3. a confirmed booking is completed once now > end (strictly)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from circulation.adapters.venue_time import VenueTimeAdapter
from circulation.components.temporal import (
    MALFORMED,
    Invalid,
    MaybeInstant,
    ensure_utc,
    parse_calendar_day,
    parse_instant,
    parse_time_of_day,
)
from circulation.domain import BookingRecord, DerivationWarning, DisplayStatus, status_text
from circulation.domain.entities import RAW_BOOKING_STATUSES
from circulation.domain.warnings import inconsistent, invalid_input
from circulation.rules import Rules

from .models import (
    BookingConfig,
    BookingFilter,
    DeriveBookingStatusInput,
    DerivedBookingView,
    FilterBookingsInput,
)
from .ports import VenueTimePort

logger = logging.getLogger(__name__)


def derive_booking_status(
    booking: BookingRecord,
    now: datetime,
    config: BookingConfig | None = None,
    venue: VenueTimePort | None = None,
) -> DerivedBookingView:
    """
    Derive the display status of a booking.

    Args:
        booking: Booking record snapshot (never modified)
        now: Current instant, shared by every derivation in one pass
        config: Booking configuration
        venue: Venue time port; built from config when omitted

    Returns:
        DerivedBookingView with display status and resolved slot
    """
    config = config or BookingConfig()
    venue = venue or VenueTimeAdapter(config.venue_timezone)
    now = ensure_utc(now)
    warnings: list[DerivationWarning] = []

    raw_status = _raw_status(booking, warnings)

    day = parse_calendar_day(booking.date, venue.tz)
    start = parse_time_of_day(booking.start_time, config.allow_end_of_day)
    end = parse_time_of_day(booking.end_time, config.allow_end_of_day)

    starts_at = _slot_instant(venue, day, start)
    ends_at = _slot_instant(venue, day, end)

    if isinstance(day, Invalid):
        warnings.append(
            invalid_input(
                f"{day.reason}_booking_date",
                f"Unusable booking date: {booking.date!r}",
                field="date",
            )
        )
    if isinstance(end, Invalid):
        warnings.append(
            invalid_input(
                f"{end.reason}_end_time",
                f"Unusable end time: {booking.end_time!r}",
                field="endTime",
            )
        )
    if isinstance(start, Invalid) and start.reason == "malformed":
        warnings.append(
            invalid_input(
                "malformed_start_time",
                f"Unusable start time: {booking.start_time!r}",
                field="startTime",
            )
        )
    if isinstance(starts_at, datetime) and isinstance(ends_at, datetime) and ends_at <= starts_at:
        warnings.append(
            inconsistent(
                "end_not_after_start",
                "Booking ends at or before it starts",
                field="endTime",
            )
        )

    cancelled_at = parse_instant(booking.cancelled_at)
    if raw_status != "cancelled" and isinstance(cancelled_at, datetime):
        warnings.append(
            inconsistent(
                "cancelled_at_without_cancellation",
                "Booking has a cancellation time but is not cancelled",
                field="cancelledAt",
            )
        )

    display: DisplayStatus
    if raw_status in ("cancelled", "completed"):
        display = raw_status
    elif isinstance(ends_at, Invalid):
        display = raw_status
    elif raw_status == "confirmed" and now > ends_at:
        display = "completed"
    else:
        display = raw_status

    if warnings:
        logger.debug(
            "Booking %s derived as %s with warnings: %s",
            booking.id,
            display,
            ", ".join(w.code for w in warnings),
        )

    return DerivedBookingView(
        display_status=display,
        starts_at=starts_at,
        ends_at=ends_at,
        warnings=tuple(warnings),
    )


def is_cancellable(booking: BookingRecord, view: DerivedBookingView) -> bool:
    """Open bookings can be cancelled until their slot has completed."""
    raw = status_text(booking.status)
    return raw in ("pending_payment", "confirmed") and view.display_status not in (
        "completed",
        "cancelled",
    )


def filter_bookings(
    bookings: Iterable[BookingRecord],
    status: BookingFilter,
    now: datetime,
    config: BookingConfig | None = None,
    venue: VenueTimePort | None = None,
) -> list[BookingRecord]:
    """
    Keep the bookings whose derived display status matches.

    "all" keeps everything. Order is preserved.
    """
    items = list(bookings)
    if status == "all":
        return items

    config = config or BookingConfig()
    venue = venue or VenueTimeAdapter(config.venue_timezone)
    now = ensure_utc(now)

    return [
        b
        for b in items
        if derive_booking_status(b, now, config, venue).display_status == status
    ]


def sort_bookings_by_day(
    bookings: Iterable[BookingRecord],
    descending: bool = False,
    config: BookingConfig | None = None,
    venue: VenueTimePort | None = None,
) -> list[BookingRecord]:
    """
    Order bookings by calendar day.

    A booking without a usable date is placed on the venue day it was
    created. Bookings with neither always come last, whatever the direction.
    Ties are ordered by id.
    """
    config = config or BookingConfig()
    venue = venue or VenueTimeAdapter(config.venue_timezone)

    dated: list[tuple[date, BookingRecord]] = []
    undated: list[BookingRecord] = []
    for booking in bookings:
        day = parse_calendar_day(booking.date, venue.tz)
        if isinstance(day, Invalid):
            day = parse_calendar_day(booking.created_at, venue.tz)
        if isinstance(day, Invalid):
            undated.append(booking)
        else:
            dated.append((day, booking))

    # Two stable passes: id ascending, then day in the requested direction
    dated.sort(key=lambda pair: str(pair[1].id))
    dated.sort(key=lambda pair: pair[0], reverse=descending)
    undated.sort(key=lambda b: str(b.id))

    return [b for _, b in dated] + undated


def _raw_status(booking: BookingRecord, warnings: list[DerivationWarning]) -> DisplayStatus:
    status = status_text(booking.status)
    if status in RAW_BOOKING_STATUSES:
        return status  # type: ignore[return-value]
    if status == "completed":
        warnings.append(
            inconsistent(
                "stored_completed_status",
                "Booking is stored as completed; completion is normally derived",
                field="status",
            )
        )
        return "completed"
    warnings.append(
        invalid_input(
            "unknown_status",
            f"Unknown booking status {booking.status!r}; treated as pending_payment",
            field="status",
        )
    )
    return "pending_payment"


def _slot_instant(
    venue: VenueTimePort,
    day: date | Invalid,
    offset: timedelta | Invalid,
) -> MaybeInstant:
    if isinstance(day, Invalid):
        return day
    if isinstance(offset, Invalid):
        return offset
    try:
        return venue.combine(day, offset)
    except (OverflowError, ValueError):
        return MALFORMED


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: DeriveBookingStatusInput | FilterBookingsInput,
    config: BookingConfig | None = None,
    venue: VenueTimePort | None = None,
) -> DerivedBookingView | list[BookingRecord]:
    """
    Run booking status operation based on input type.

    Args:
        input_data: DeriveBookingStatusInput or FilterBookingsInput
        config: Booking configuration
        venue: Optional venue time port

    Returns:
        DerivedBookingView, or the filtered bookings
    """
    if isinstance(input_data, DeriveBookingStatusInput):
        return derive_booking_status(input_data.booking, input_data.now, config, venue)

    if isinstance(input_data, FilterBookingsInput):
        return filter_bookings(
            input_data.bookings, input_data.status, input_data.now, config, venue
        )

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def config_from_rules(rules: Rules) -> BookingConfig:
    """Build BookingConfig from the rules file."""
    return BookingConfig(
        venue_timezone=rules.bookings.venue_timezone,
        allow_end_of_day=rules.bookings.allow_end_of_day,
    )
