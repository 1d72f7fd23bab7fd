"""
Settlement component.

Pure calculation of the fine and the deposit outcome that a loan's derived
status implies. The engine never invents a fine amount: fines are reported
from the authoritative record, and the only locally computed fine is zero.

Rules:
- borrowed: fine 0, deposit pending
- late (not returned): fine from the record or 0, deposit pending
- returned: refund status from the record when present, otherwise forfeited
  when the fine covers the deposit and refunded when it does not
- deposit hold never paid (and nothing settled): outcome "n/a"
"""

from __future__ import annotations

import logging

from circulation.components.loan_status import LoanStatusResult
from circulation.components.temporal import Invalid, MaybeAmount, parse_amount
from circulation.domain import DerivationWarning, LoanRecord, RefundStatus, status_text
from circulation.domain.entities import PAYMENT_STATUSES, REFUND_STATUSES
from circulation.domain.warnings import inconsistent, invalid_input, precision

from .models import (
    DepositOutcome,
    FineSource,
    PreviewReturnInput,
    ReturnPreview,
    SettleInput,
    Settlement,
)

logger = logging.getLogger(__name__)


def clamp_fine(amount: int, deposit: int) -> int:
    """Clamp a fine into [0, deposit]."""
    return max(0, min(amount, deposit))


def settle(loan: LoanRecord, derived: LoanStatusResult) -> Settlement:
    """
    Compute the settlement for a loan.

    Args:
        loan: Loan record snapshot
        derived: Output of derive_loan_status for the same record and now

    Returns:
        Settlement with fine, deposit outcome and warnings
    """
    warnings: list[DerivationWarning] = []

    deposit = _deposit(loan, warnings)
    reported_fine = _reported_fine(loan, warnings)
    refund_status = _refund_status(loan, warnings)
    unpaid = _payment_status(loan, warnings) == "unpaid"
    status = derived.effective_status

    fine: int
    fine_source: FineSource
    outcome: DepositOutcome

    if status == "borrowed":
        fine, fine_source = clamp_fine(0, deposit), "local"
    elif isinstance(reported_fine, Invalid):
        fine, fine_source = clamp_fine(0, deposit), "local"
    else:
        fine, fine_source = reported_fine, "authoritative"

    if status == "returned":
        if refund_status is not None:
            outcome = refund_status
        elif unpaid:
            outcome = "n/a"
        else:
            outcome = derive_deposit_outcome(fine, deposit)
    else:
        if refund_status is not None and refund_status != "pending":
            warnings.append(
                inconsistent(
                    "refund_status_before_return",
                    f"Deposit marked {refund_status} before the loan was returned",
                    field="refundStatus",
                )
            )
        outcome = "n/a" if unpaid else "pending"

    if fine_source == "authoritative" and fine != clamp_fine(fine, deposit):
        warnings.append(
            precision(
                "fine_exceeds_deposit",
                f"Reported fine {fine} exceeds deposit {deposit}",
                field="fineAmount",
            )
        )

    if warnings:
        logger.debug(
            "Loan %s settled as %s with warnings: %s",
            loan.id,
            outcome,
            ", ".join(w.code for w in warnings),
        )

    return Settlement(
        effective_status=status,
        fine=fine,
        deposit=deposit,
        deposit_outcome=outcome,
        fine_source=fine_source,
        warnings=tuple(warnings),
    )


def derive_deposit_outcome(fine: int, deposit: int) -> DepositOutcome:
    """
    Binary deposit outcome for a returned loan without a recorded refund status.

    A fine smaller than the deposit still reports "refunded"; the withheld
    part is not modelled.
    """
    if fine <= 0:
        return "refunded"
    if fine >= deposit:
        return "forfeited"
    return "refunded"


def preview_return(settlement: Settlement) -> ReturnPreview:
    """
    What returning the loan means for the deposit, for the return button hint.

    Returned loans mirror their settled outcome.
    """
    if settlement.deposit_outcome == "n/a":
        return "not_applicable"

    if settlement.effective_status == "returned":
        if settlement.deposit_outcome == "forfeited":
            return "forfeit_deposit"
        if settlement.deposit_outcome == "refunded" and settlement.fine > 0:
            return "deduct_fine"
        if settlement.deposit_outcome == "refunded":
            return "full_refund"
        return "not_applicable"

    if settlement.fine > 0 and settlement.fine >= settlement.deposit:
        return "forfeit_deposit"
    if settlement.fine > 0:
        return "deduct_fine"
    return "full_refund"


def _deposit(loan: LoanRecord, warnings: list[DerivationWarning]) -> int:
    deposit = parse_amount(loan.deposit_amount)
    if isinstance(deposit, Invalid):
        warnings.append(
            invalid_input(
                f"{deposit.reason}_deposit_amount",
                f"Unusable deposit amount {loan.deposit_amount!r}; treated as 0",
                field="depositAmount",
            )
        )
        return 0
    return deposit


def _reported_fine(loan: LoanRecord, warnings: list[DerivationWarning]) -> MaybeAmount:
    fine = parse_amount(loan.fine_amount)
    if isinstance(fine, Invalid) and fine.reason == "malformed":
        warnings.append(
            invalid_input(
                "malformed_fine_amount",
                f"Unusable fine amount {loan.fine_amount!r}; ignored",
                field="fineAmount",
            )
        )
    return fine


def _payment_status(loan: LoanRecord, warnings: list[DerivationWarning]) -> str:
    raw = loan.payment_status
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return ""
    value = status_text(raw)
    if value not in PAYMENT_STATUSES:
        warnings.append(
            invalid_input(
                "unknown_payment_status",
                f"Unknown payment status {raw!r}; treated as paid",
                field="paymentStatus",
            )
        )
    return value


def _refund_status(loan: LoanRecord, warnings: list[DerivationWarning]) -> RefundStatus | None:
    raw = loan.refund_status
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    value = status_text(raw)
    if value in REFUND_STATUSES:
        return value  # type: ignore[return-value]
    warnings.append(
        invalid_input(
            "unknown_refund_status",
            f"Unknown refund status {loan.refund_status!r}; ignored",
            field="refundStatus",
        )
    )
    return None


# --- Run Function (Atomic Component Pattern) ---


def run(input_data: SettleInput | PreviewReturnInput) -> Settlement | ReturnPreview:
    """
    Run settlement operation based on input type.

    Args:
        input_data: SettleInput or PreviewReturnInput

    Returns:
        Settlement, or the ReturnPreview literal
    """
    if isinstance(input_data, SettleInput):
        return settle(input_data.loan, input_data.derived)

    if isinstance(input_data, PreviewReturnInput):
        return preview_return(settle(input_data.loan, input_data.derived))

    raise TypeError(f"Unknown input type: {type(input_data)}")
