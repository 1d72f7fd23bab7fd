"""
Loan status component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from circulation.components.temporal import MaybeInstant
from circulation.domain import DerivationWarning, LoanRecord, LoanStatus

# --- Configuration ---


@dataclass(frozen=True)
class LoanConfig:
    """Loan configuration from rules."""

    period_days: int = 7


# --- Input Models ---


@dataclass(frozen=True)
class DeriveLoanStatusInput:
    """Input for deriving a loan's live status."""

    loan: LoanRecord
    now: datetime


# --- Output Models ---


@dataclass(frozen=True)
class LoanStatusResult:
    """
    Live status of a loan at a given instant.

    borrowed_at may be synthesized from the due date for display; a
    synthesized value must not be used for settlement.
    """

    effective_status: LoanStatus
    is_overdue: bool
    borrowed_at: MaybeInstant
    borrowed_at_synthesized: bool
    due_at: MaybeInstant
    warnings: tuple[DerivationWarning, ...] = ()
