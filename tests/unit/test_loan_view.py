from datetime import UTC, datetime, timedelta

import pytest

from circulation.components.loan_view import (
    DeriveLoanViewInput,
    DerivedLoanView,
    FilterLoansInput,
    days_until_due,
    derive_loan_view,
    filter_loans,
    run,
)
from circulation.components.temporal import ABSENT


class TestDeriveLoanView:
    def test_borrowed(self, make_loan, now) -> None:
        view = derive_loan_view(make_loan(), now)
        assert view.effective_status == "borrowed"
        assert view.display_key == "borrowed"
        assert view.fine == 0
        assert view.deposit_outcome == "pending"
        assert view.days_until_due == 4
        assert view.return_preview == "full_refund"
        assert view.borrowed_at_synthesized is True
        assert view.borrowed_at == datetime(2026, 3, 7, 5, 0, 0, tzinfo=UTC)

    def test_late_shows_overdue_badge(self, make_loan, now) -> None:
        loan = make_loan(status="late", dueDate="2026-03-08T05:00:00Z", fineAmount=3000)
        view = derive_loan_view(loan, now)
        assert view.display_key == "overdue"
        assert view.is_overdue is True
        assert view.fine == 3000
        assert view.days_until_due == -2
        assert view.return_preview == "deduct_fine"

    def test_returned(self, make_loan, now) -> None:
        loan = make_loan(status="returned", returnDate="2026-03-09T00:00:00Z")
        view = derive_loan_view(loan, now)
        assert view.display_key == "returned"
        assert view.deposit_outcome == "refunded"

    def test_unpaid_badge(self, make_loan, now) -> None:
        view = derive_loan_view(make_loan(paymentStatus="unpaid"), now)
        assert view.display_key == "pending_payment"
        assert view.deposit_outcome == "n/a"
        assert view.return_preview == "not_applicable"

    def test_warnings_from_both_stages(self, make_loan, now) -> None:
        loan = make_loan(dueDate="soon", depositAmount=-5)
        view = derive_loan_view(loan, now)
        codes = [w.code for w in view.warnings]
        assert codes[0] == "malformed_due_date"
        assert "malformed_deposit_amount" in codes
        assert view.days_until_due is None


class TestDaysUntilDue:
    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(days=4), 4),
            (timedelta(days=3, hours=1), 4),
            (timedelta(hours=1), 1),
            (timedelta(0), 0),
            (timedelta(hours=-1), 0),
            (timedelta(days=-1), -1),
            (timedelta(days=-1, hours=-1), -1),
        ],
    )
    def test_rounds_up(self, now, delta: timedelta, expected: int) -> None:
        assert days_until_due(now + delta, now) == expected

    def test_unknown_due(self, now) -> None:
        assert days_until_due(ABSENT, now) is None


class TestFilterLoans:
    @pytest.fixture
    def loans(self, make_loan):
        return [
            make_loan(id="a"),
            make_loan(id="b", dueDate="2026-03-01T00:00:00Z"),
            make_loan(id="c", status="returned", returnDate="2026-03-02"),
            make_loan(id="d", status="late", dueDate="2026-03-02T00:00:00Z"),
        ]

    def test_filter_late_uses_derived_status(self, loans, now) -> None:
        assert [loan.id for loan in filter_loans(loans, "late", now)] == ["b", "d"]

    def test_filter_borrowed(self, loans, now) -> None:
        assert [loan.id for loan in filter_loans(loans, "borrowed", now)] == ["a"]

    def test_filter_all(self, loans, now) -> None:
        assert filter_loans(loans, "all", now) == loans


class TestRun:
    def test_view_input(self, make_loan, now) -> None:
        result = run(DeriveLoanViewInput(loan=make_loan(), now=now))
        assert isinstance(result, DerivedLoanView)

    def test_filter_input(self, make_loan, now) -> None:
        loans = (make_loan(id="a"), make_loan(id="b", status="returned"))
        result = run(FilterLoansInput(loans=loans, status="returned", now=now))
        assert [loan.id for loan in result] == ["b"]

    def test_unknown_input(self) -> None:
        with pytest.raises(TypeError):
            run(42)  # type: ignore[arg-type]
