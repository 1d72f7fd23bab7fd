"""
Loan status component.

Pure derivation of a loan's live status (borrowed / late / returned) from its
raw fields and an explicit "now".

Precedence:
1. raw "returned" always wins and is never overdue
2. without a valid due date the loan is "borrowed" and not overdue
3. otherwise overdue means now > due (strictly); a raw "late" from the
   server wins over a computed "not overdue"
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from circulation.components.temporal import (
    ABSENT,
    Invalid,
    MaybeInstant,
    ensure_utc,
    parse_instant,
)
from circulation.domain import DerivationWarning, LoanRecord, LoanStatus, status_text
from circulation.domain.entities import LOAN_STATUSES
from circulation.domain.warnings import inconsistent, invalid_input
from circulation.rules import Rules

from .models import DeriveLoanStatusInput, LoanConfig, LoanStatusResult

logger = logging.getLogger(__name__)


def derive_loan_status(
    loan: LoanRecord,
    now: datetime,
    config: LoanConfig | None = None,
) -> LoanStatusResult:
    """
    Derive the live status of a loan.

    Args:
        loan: Loan record snapshot (never modified)
        now: Current instant, shared by every derivation in one pass
        config: Loan configuration

    Returns:
        LoanStatusResult with effective status, overdue flag and dates
    """
    config = config or LoanConfig()
    now = ensure_utc(now)
    warnings: list[DerivationWarning] = []

    raw_status = _raw_status(loan, warnings)
    due_at = parse_instant(loan.due_date)
    return_at = parse_instant(loan.return_date)
    borrowed_at, synthesized = resolve_borrowed_at(loan, due_at, config, warnings)

    effective: LoanStatus
    if raw_status == "returned":
        effective, is_overdue = "returned", False
        if isinstance(return_at, Invalid):
            if return_at.reason == "absent":
                warnings.append(
                    inconsistent(
                        "returned_without_return_date",
                        "Loan is returned but has no return date",
                        field="returnDate",
                    )
                )
            else:
                warnings.append(
                    invalid_input(
                        "malformed_return_date",
                        f"Unparseable return date: {loan.return_date!r}",
                        field="returnDate",
                    )
                )
    elif isinstance(due_at, Invalid):
        effective, is_overdue = "borrowed", False
        warnings.append(_due_date_warning(loan, due_at))
        if raw_status == "late":
            warnings.append(
                inconsistent(
                    "late_without_due_date",
                    "Loan is marked late but has no usable due date",
                    field="dueDate",
                )
            )
    else:
        is_overdue = now > due_at
        if is_overdue:
            effective = "late"
        elif raw_status == "late":
            effective = "late"
            warnings.append(
                inconsistent(
                    "late_status_not_overdue",
                    "Server marks the loan late although the due date has not passed",
                    field="status",
                )
            )
        else:
            effective = "borrowed"

    if raw_status != "returned" and not isinstance(return_at, Invalid):
        warnings.append(
            inconsistent(
                "return_date_on_open_loan",
                "Loan has a return date but is not marked returned",
                field="returnDate",
            )
        )

    if warnings:
        logger.debug(
            "Loan %s derived as %s with warnings: %s",
            loan.id,
            effective,
            ", ".join(w.code for w in warnings),
        )

    return LoanStatusResult(
        effective_status=effective,
        is_overdue=is_overdue,
        borrowed_at=borrowed_at,
        borrowed_at_synthesized=synthesized,
        due_at=due_at,
        warnings=tuple(warnings),
    )


def resolve_borrowed_at(
    loan: LoanRecord,
    due_at: MaybeInstant,
    config: LoanConfig,
    warnings: list[DerivationWarning],
) -> tuple[MaybeInstant, bool]:
    """
    Resolve the borrow instant for display.

    Uses the record's borrow date when valid and not after the return date.
    Otherwise falls back to due date minus the loan period, flagged as
    synthesized. Returns (instant, synthesized).
    """
    borrowed_at = parse_instant(loan.borrow_date)

    if isinstance(borrowed_at, datetime):
        return_at = parse_instant(loan.return_date)
        if isinstance(return_at, datetime) and return_at < borrowed_at:
            warnings.append(
                inconsistent(
                    "return_before_borrow",
                    "Return date precedes borrow date; borrow date treated as unknown",
                    field="borrowDate",
                )
            )
            borrowed_at = ABSENT
        else:
            return borrowed_at, False
    elif borrowed_at.reason == "malformed":
        warnings.append(
            invalid_input(
                "malformed_borrow_date",
                f"Unparseable borrow date: {loan.borrow_date!r}",
                field="borrowDate",
            )
        )

    if isinstance(due_at, datetime):
        return due_at - timedelta(days=config.period_days), True

    return borrowed_at, False


def _raw_status(loan: LoanRecord, warnings: list[DerivationWarning]) -> LoanStatus | None:
    status = status_text(loan.status)
    if status in LOAN_STATUSES:
        return status  # type: ignore[return-value]
    warnings.append(
        invalid_input(
            "unknown_status",
            f"Unknown loan status {loan.status!r}; treated as borrowed",
            field="status",
        )
    )
    return None


def _due_date_warning(loan: LoanRecord, due_at: Invalid) -> DerivationWarning:
    if due_at.reason == "absent":
        return invalid_input("missing_due_date", "Loan has no due date", field="dueDate")
    return invalid_input(
        "malformed_due_date",
        f"Unparseable due date: {loan.due_date!r}",
        field="dueDate",
    )


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: DeriveLoanStatusInput,
    config: LoanConfig | None = None,
) -> LoanStatusResult:
    """Run loan status derivation for the given input."""
    if isinstance(input_data, DeriveLoanStatusInput):
        return derive_loan_status(input_data.loan, input_data.now, config)

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def config_from_rules(rules: Rules) -> LoanConfig:
    """Build LoanConfig from the rules file."""
    return LoanConfig(period_days=rules.loans.period_days)
