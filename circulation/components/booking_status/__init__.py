"""
Booking status component - Display status of a room booking.
"""

from .component import (
    config_from_rules,
    derive_booking_status,
    filter_bookings,
    is_cancellable,
    run,
    sort_bookings_by_day,
)
from .models import (
    BookingConfig,
    BookingFilter,
    DeriveBookingStatusInput,
    DerivedBookingView,
    FilterBookingsInput,
)
from .ports import VenueTimePort

__all__ = [
    # Entry points
    "derive_booking_status",
    "filter_bookings",
    "is_cancellable",
    "run",
    "sort_bookings_by_day",
    "config_from_rules",
    # Input models
    "DeriveBookingStatusInput",
    "FilterBookingsInput",
    # Output models
    "BookingConfig",
    "BookingFilter",
    "DerivedBookingView",
    # Ports
    "VenueTimePort",
]
