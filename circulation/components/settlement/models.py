"""
Settlement component models.

Money is always an int in the smallest currency unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from circulation.components.loan_status import LoanStatusResult
from circulation.domain import DerivationWarning, LoanRecord, LoanStatus

DepositOutcome = Literal["refunded", "forfeited", "pending", "n/a"]
FineSource = Literal["authoritative", "local"]
ReturnPreview = Literal["forfeit_deposit", "deduct_fine", "full_refund", "not_applicable"]


# --- Input Models ---


@dataclass(frozen=True)
class SettleInput:
    """Input for settling a loan whose status is already derived."""

    loan: LoanRecord
    derived: LoanStatusResult


@dataclass(frozen=True)
class PreviewReturnInput:
    """Input for previewing what returning a loan would do to the deposit."""

    loan: LoanRecord
    derived: LoanStatusResult


# --- Output Models ---


@dataclass(frozen=True)
class Settlement:
    """
    Fine and deposit disposition for a loan.

    fine_source tells whether the fine came from the record (passed through
    unclamped) or was computed here (always within [0, deposit]).
    """

    effective_status: LoanStatus
    fine: int
    deposit: int
    deposit_outcome: DepositOutcome
    fine_source: FineSource
    warnings: tuple[DerivationWarning, ...] = ()
