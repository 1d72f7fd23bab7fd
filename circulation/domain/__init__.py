"""Domain records and shared value types."""

from .entities import (
    BookingRecord,
    DisplayStatus,
    LoanRecord,
    LoanStatus,
    PaymentStatus,
    RawBookingStatus,
    RefundStatus,
    status_text,
)
from .warnings import DerivationWarning, WarningKind

__all__ = [
    "BookingRecord",
    "DerivationWarning",
    "DisplayStatus",
    "LoanRecord",
    "LoanStatus",
    "PaymentStatus",
    "RawBookingStatus",
    "RefundStatus",
    "WarningKind",
    "status_text",
]
