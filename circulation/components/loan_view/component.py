"""
Loan view component.

Composes the loan status derivation and the settlement into the single view
that every loan screen renders, using one "now" for both stages.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from circulation.components.loan_status import LoanConfig, LoanStatusResult, derive_loan_status
from circulation.components.settlement import preview_return, settle
from circulation.components.temporal import MaybeInstant, ensure_utc
from circulation.domain import LoanRecord, status_text

from .models import (
    DeriveLoanViewInput,
    DerivedLoanView,
    FilterLoansInput,
    LoanDisplayKey,
    LoanFilter,
)

_ONE_DAY = timedelta(days=1)


def derive_loan_view(
    loan: LoanRecord,
    now: datetime,
    config: LoanConfig | None = None,
) -> DerivedLoanView:
    """
    Build the derived view of a loan.

    Args:
        loan: Loan record snapshot
        now: Current instant
        config: Loan configuration

    Returns:
        DerivedLoanView with status, settlement and display helpers
    """
    now = ensure_utc(now)
    derived = derive_loan_status(loan, now, config)
    settlement = settle(loan, derived)

    return DerivedLoanView(
        effective_status=derived.effective_status,
        is_overdue=derived.is_overdue,
        fine=settlement.fine,
        deposit_outcome=settlement.deposit_outcome,
        borrowed_at=derived.borrowed_at,
        borrowed_at_synthesized=derived.borrowed_at_synthesized,
        due_at=derived.due_at,
        display_key=display_key(loan, derived),
        days_until_due=days_until_due(derived.due_at, now),
        return_preview=preview_return(settlement),
        warnings=derived.warnings + settlement.warnings,
    )


def display_key(loan: LoanRecord, derived: LoanStatusResult) -> LoanDisplayKey:
    """Badge shown on the loan detail page."""
    if derived.effective_status == "late":
        return "overdue"
    if derived.effective_status == "returned":
        return "returned"
    if status_text(loan.payment_status) == "unpaid":
        return "pending_payment"
    return "borrowed"


def days_until_due(due_at: MaybeInstant, now: datetime) -> int | None:
    """
    Whole days until the due date, rounded up.

    Negative once the loan is overdue; None when the due date is unknown.
    """
    if not isinstance(due_at, datetime):
        return None
    delta = due_at - ensure_utc(now)
    return -((-delta) // _ONE_DAY)


def filter_loans(
    loans: Iterable[LoanRecord],
    status: LoanFilter,
    now: datetime,
    config: LoanConfig | None = None,
) -> list[LoanRecord]:
    """
    Keep the loans whose derived effective status matches.

    "all" keeps everything. Order is preserved.
    """
    items = list(loans)
    if status == "all":
        return items
    now = ensure_utc(now)
    return [
        loan for loan in items if derive_loan_status(loan, now, config).effective_status == status
    ]


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: DeriveLoanViewInput | FilterLoansInput,
    config: LoanConfig | None = None,
) -> DerivedLoanView | list[LoanRecord]:
    """
    Run loan view operation based on input type.

    Args:
        input_data: DeriveLoanViewInput or FilterLoansInput
        config: Loan configuration

    Returns:
        DerivedLoanView, or the filtered loans
    """
    if isinstance(input_data, DeriveLoanViewInput):
        return derive_loan_view(input_data.loan, input_data.now, config)

    if isinstance(input_data, FilterLoansInput):
        return filter_loans(input_data.loans, input_data.status, input_data.now, config)

    raise TypeError(f"Unknown input type: {type(input_data)}")
