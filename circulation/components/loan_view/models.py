"""
Loan view component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from circulation.components.settlement import DepositOutcome, ReturnPreview
from circulation.components.temporal import MaybeInstant
from circulation.domain import DerivationWarning, LoanRecord, LoanStatus

LoanDisplayKey = Literal["overdue", "returned", "pending_payment", "borrowed"]
LoanFilter = LoanStatus | Literal["all"]


# --- Input Models ---


@dataclass(frozen=True)
class DeriveLoanViewInput:
    """Input for building the full derived view of a loan."""

    loan: LoanRecord
    now: datetime


@dataclass(frozen=True)
class FilterLoansInput:
    """Input for filtering loans by derived status."""

    loans: tuple[LoanRecord, ...]
    status: LoanFilter
    now: datetime


# --- Output Models ---


@dataclass(frozen=True)
class DerivedLoanView:
    """
    Everything a screen needs to show about a loan at one instant.

    Not persisted; rebuilt on every read.
    """

    effective_status: LoanStatus
    is_overdue: bool
    fine: int
    deposit_outcome: DepositOutcome
    borrowed_at: MaybeInstant
    borrowed_at_synthesized: bool
    due_at: MaybeInstant
    display_key: LoanDisplayKey
    days_until_due: int | None
    return_preview: ReturnPreview
    warnings: tuple[DerivationWarning, ...] = ()
