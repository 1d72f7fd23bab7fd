"""
Booking status component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from circulation.components.temporal import MaybeInstant
from circulation.domain import BookingRecord, DerivationWarning, DisplayStatus

BookingFilter = DisplayStatus | Literal["all"]


# --- Configuration ---


@dataclass(frozen=True)
class BookingConfig:
    """Booking configuration from rules."""

    venue_timezone: str = "Asia/Jakarta"
    allow_end_of_day: bool = True


# --- Input Models ---


@dataclass(frozen=True)
class DeriveBookingStatusInput:
    """Input for deriving a booking's display status."""

    booking: BookingRecord
    now: datetime


@dataclass(frozen=True)
class FilterBookingsInput:
    """Input for filtering bookings by derived display status."""

    bookings: tuple[BookingRecord, ...]
    status: BookingFilter
    now: datetime


# --- Output Models ---


@dataclass(frozen=True)
class DerivedBookingView:
    """Display status of a booking, with the slot resolved to UTC."""

    display_status: DisplayStatus
    starts_at: MaybeInstant
    ends_at: MaybeInstant
    warnings: tuple[DerivationWarning, ...] = ()
