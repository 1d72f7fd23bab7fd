"""
Batch evaluation of a records snapshot.

The clock is read exactly once; every loan and booking in the batch is
derived against that same instant so no record can flip state mid-run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from circulation.adapters.venue_time import VenueTimeAdapter, create_venue_time_adapter
from circulation.components.booking_status import (
    DerivedBookingView,
    derive_booking_status,
    is_cancellable,
)
from circulation.components.due_window import DueWindowResult, classify_due_window
from circulation.components.loan_view import DerivedLoanView, derive_loan_view
from circulation.components.temporal import Invalid, MaybeInstant
from circulation.domain import BookingRecord, DerivationWarning, LoanRecord
from circulation.ports import ClockPort
from circulation.rules import Rules

from .config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchReport:
    """Derived views for one snapshot, all computed at `now`."""

    now: datetime
    loans: tuple[tuple[LoanRecord, DerivedLoanView], ...]
    bookings: tuple[tuple[BookingRecord, DerivedBookingView], ...]
    due_window: DueWindowResult
    venue: VenueTimeAdapter

    @property
    def warning_count(self) -> int:
        return sum(len(v.warnings) for _, v in self.loans) + sum(
            len(v.warnings) for _, v in self.bookings
        )


def evaluate_batch(
    loans: Iterable[LoanRecord],
    bookings: Iterable[BookingRecord],
    *,
    clock: ClockPort,
    rules: Rules | None = None,
    window_days: int | None = None,
) -> BatchReport:
    """
    Derive every loan and booking in a snapshot against one clock reading.

    Args:
        loans: Loan records
        bookings: Booking records
        clock: Clock port, read once
        rules: Rules; defaults apply when omitted
        window_days: Due-window override

    Returns:
        BatchReport
    """
    config = EngineConfig.from_rules(rules or Rules())
    venue = create_venue_time_adapter(config.bookings.venue_timezone)
    now = clock.now_utc()

    loan_list = list(loans)
    booking_list = list(bookings)

    loan_views = tuple((loan, derive_loan_view(loan, now, config.loans)) for loan in loan_list)
    booking_views = tuple(
        (booking, derive_booking_status(booking, now, config.bookings, venue))
        for booking in booking_list
    )
    buckets = classify_due_window(
        loan_list, now, window_days, config.due_window, config.loans
    )

    report = BatchReport(
        now=now,
        loans=loan_views,
        bookings=booking_views,
        due_window=buckets,
        venue=venue,
    )
    logger.info(
        "Evaluated %d loans and %d bookings at %s (%d late, %d due soon, %d warnings)",
        len(loan_views),
        len(booking_views),
        now.isoformat(),
        len(buckets.late),
        len(buckets.due_soon),
        report.warning_count,
    )
    return report


# --- Serialization ---


def _instant(value: MaybeInstant) -> str | None:
    if isinstance(value, Invalid):
        return None
    return value.isoformat()


def _warnings(warnings: tuple[DerivationWarning, ...]) -> list[dict[str, Any]]:
    return [
        {"kind": w.kind, "code": w.code, "message": w.message, "field": w.field}
        for w in warnings
    ]


def loan_view_to_dict(loan: LoanRecord, view: DerivedLoanView) -> dict[str, Any]:
    return {
        "id": loan.id,
        "effectiveStatus": view.effective_status,
        "isOverdue": view.is_overdue,
        "fine": view.fine,
        "depositOutcome": view.deposit_outcome,
        "borrowedAt": _instant(view.borrowed_at),
        "borrowedAtSynthesized": view.borrowed_at_synthesized,
        "dueAt": _instant(view.due_at),
        "displayKey": view.display_key,
        "daysUntilDue": view.days_until_due,
        "returnPreview": view.return_preview,
        "warnings": _warnings(view.warnings),
    }


def _local(value: MaybeInstant, venue: VenueTimeAdapter) -> str | None:
    if isinstance(value, Invalid):
        return None
    return venue.to_local(value).isoformat()


def booking_view_to_dict(
    booking: BookingRecord,
    view: DerivedBookingView,
    venue: VenueTimeAdapter | None = None,
) -> dict[str, Any]:
    """Serialize a booking view; slot times are also given in venue wall time."""
    venue = venue or create_venue_time_adapter()
    return {
        "id": booking.id,
        "displayStatus": view.display_status,
        "startsAt": _instant(view.starts_at),
        "endsAt": _instant(view.ends_at),
        "startsAtLocal": _local(view.starts_at, venue),
        "endsAtLocal": _local(view.ends_at, venue),
        "cancellable": is_cancellable(booking, view),
        "warnings": _warnings(view.warnings),
    }


def due_window_to_dict(result: DueWindowResult) -> dict[str, Any]:
    return {
        "late": [loan.id for loan in result.late],
        "dueSoon": [loan.id for loan in result.due_soon],
    }


def report_to_dict(report: BatchReport) -> dict[str, Any]:
    return {
        "now": report.now.isoformat(),
        "venueTimezone": report.venue.timezone_name,
        "loans": [loan_view_to_dict(loan, view) for loan, view in report.loans],
        "bookings": [
            booking_view_to_dict(b, view, report.venue) for b, view in report.bookings
        ],
        "dueWindow": due_window_to_dict(report.due_window),
    }
