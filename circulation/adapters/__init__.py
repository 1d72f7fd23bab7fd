"""Clock and venue time adapters."""

from .clock import FrozenClock, SystemClock
from .venue_time import VenueTimeAdapter, create_venue_time_adapter

__all__ = [
    "FrozenClock",
    "SystemClock",
    "VenueTimeAdapter",
    "create_venue_time_adapter",
]
