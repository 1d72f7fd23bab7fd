import json
from datetime import UTC, datetime, timedelta

import pytest

from circulation.adapters.clock import FrozenClock
from circulation.adapters.venue_time import VenueTimeAdapter
from circulation.app_shell.batch import (
    BatchReport,
    booking_view_to_dict,
    evaluate_batch,
    loan_view_to_dict,
    report_to_dict,
)
from circulation.components.booking_status import derive_booking_status
from circulation.components.loan_view import derive_loan_view
from circulation.rules import Rules


class CountingClock:
    """Clock that moves forward on every read."""

    def __init__(self, start: datetime) -> None:
        self.reads = 0
        self._now = start

    def now_utc(self) -> datetime:
        self.reads += 1
        current = self._now
        self._now = self._now + timedelta(hours=1)
        return current


class TestEvaluateBatch:
    def test_clock_read_once(self, make_loan, make_booking, now) -> None:
        clock = CountingClock(now)
        loans = [make_loan(id=f"loan-{i}") for i in range(5)]
        bookings = [make_booking(id=f"booking-{i}") for i in range(5)]

        report = evaluate_batch(loans, bookings, clock=clock)

        assert clock.reads == 1
        assert report.now == now

    def test_records_share_one_instant(self, make_booking) -> None:
        # Both bookings end at 10:00 Jakarta; the batch must not split them
        end = datetime(2026, 3, 10, 3, 0, tzinfo=UTC)
        clock = CountingClock(end - timedelta(seconds=1))
        bookings = [make_booking(id="a"), make_booking(id="b")]

        report = evaluate_batch([], bookings, clock=clock)

        statuses = {view.display_status for _, view in report.bookings}
        assert statuses == {"confirmed"}

    def test_report_contents(self, make_loan, make_booking, frozen_clock) -> None:
        loans = [make_loan(id="on-time"), make_loan(id="late", dueDate="2026-03-01T00:00:00Z")]
        bookings = [make_booking(id="done", date="2026-03-09")]

        report = evaluate_batch(loans, bookings, clock=frozen_clock)

        assert isinstance(report, BatchReport)
        assert [loan.id for loan, _ in report.loans] == ["on-time", "late"]
        assert report.loans[1][1].effective_status == "late"
        assert report.bookings[0][1].display_status == "completed"
        assert [loan.id for loan in report.due_window.late] == ["late"]
        assert [loan.id for loan in report.due_window.due_soon] == ["on-time"]

    def test_rules_are_applied(self, make_booking, frozen_clock) -> None:
        rules = Rules.model_validate({"bookings": {"venue_timezone": "UTC"}})
        # 10:00 UTC has not passed at 05:00 UTC
        report = evaluate_batch([], [make_booking()], clock=frozen_clock, rules=rules)
        assert report.bookings[0][1].display_status == "confirmed"

    def test_window_override(self, make_loan, frozen_clock) -> None:
        report = evaluate_batch([make_loan()], [], clock=frozen_clock, window_days=1)
        assert report.due_window.due_soon == ()

    def test_warning_count(self, make_loan, make_booking, frozen_clock) -> None:
        loans = [make_loan(dueDate="bad")]
        bookings = [make_booking(endTime=None)]
        report = evaluate_batch(loans, bookings, clock=frozen_clock)
        assert report.warning_count == 2

    def test_empty_snapshot(self, frozen_clock) -> None:
        report = evaluate_batch([], [], clock=frozen_clock)
        assert report.loans == ()
        assert report.bookings == ()
        assert report.warning_count == 0

    def test_logs_summary(self, make_loan, frozen_clock, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="circulation.app_shell.batch"):
            evaluate_batch([make_loan()], [], clock=frozen_clock)
        assert "Evaluated 1 loans and 0 bookings" in caplog.text


class TestSerialization:
    def test_loan_view_dict(self, make_loan, now) -> None:
        loan = make_loan(dueDate=None)
        result = loan_view_to_dict(loan, derive_loan_view(loan, now))
        assert result["id"] == "loan-1"
        assert result["effectiveStatus"] == "borrowed"
        assert result["dueAt"] is None
        assert result["borrowedAt"] is None
        assert result["warnings"][0]["code"] == "missing_due_date"
        assert result["warnings"][0]["kind"] == "invalid_input"

    def test_loan_view_dates_are_iso(self, make_loan, now) -> None:
        loan = make_loan()
        result = loan_view_to_dict(loan, derive_loan_view(loan, now))
        assert result["dueAt"] == "2026-03-14T05:00:00+00:00"
        assert result["borrowedAtSynthesized"] is True

    def test_booking_view_dict(self, make_booking, now) -> None:
        booking = make_booking(date="2026-03-11")
        result = booking_view_to_dict(booking, derive_booking_status(booking, now))
        assert result["displayStatus"] == "confirmed"
        assert result["cancellable"] is True
        assert result["endsAt"] == "2026-03-11T03:00:00+00:00"
        assert result["startsAtLocal"] == "2026-03-11T09:00:00+07:00"
        assert result["endsAtLocal"] == "2026-03-11T10:00:00+07:00"

    def test_booking_view_dict_in_venue_time(self, make_booking, now) -> None:
        venue = VenueTimeAdapter("Europe/London")
        booking = make_booking(date="2026-07-15")
        view = derive_booking_status(booking, now, venue=venue)
        result = booking_view_to_dict(booking, view, venue)
        assert result["endsAt"] == "2026-07-15T09:00:00+00:00"
        assert result["endsAtLocal"] == "2026-07-15T10:00:00+01:00"

    def test_invalid_slot_has_no_local_time(self, make_booking, now) -> None:
        booking = make_booking(endTime="late")
        result = booking_view_to_dict(booking, derive_booking_status(booking, now))
        assert result["endsAt"] is None
        assert result["endsAtLocal"] is None

    def test_report_is_json_serializable(self, make_loan, make_booking) -> None:
        clock = FrozenClock(datetime(2026, 3, 10, 5, 0, tzinfo=UTC))
        report = evaluate_batch([make_loan()], [make_booking()], clock=clock)
        encoded = json.dumps(report_to_dict(report))
        decoded = json.loads(encoded)
        assert decoded["now"] == "2026-03-10T05:00:00+00:00"
        assert decoded["dueWindow"] == {"late": [], "dueSoon": ["loan-1"]}
        assert decoded["venueTimezone"] == "Asia/Jakarta"
        assert decoded["bookings"][0]["endsAtLocal"] == "2026-03-10T10:00:00+07:00"

    def test_report_uses_configured_venue(self, make_booking, frozen_clock) -> None:
        rules = Rules.model_validate({"bookings": {"venue_timezone": "Europe/London"}})
        report = evaluate_batch([], [make_booking()], clock=frozen_clock, rules=rules)
        result = report_to_dict(report)
        assert result["venueTimezone"] == "Europe/London"
        assert result["bookings"][0]["endsAtLocal"] == "2026-03-10T10:00:00+00:00"
