"""
Due-window component.

Buckets loans into "late" and "due soon" for dashboard-style alerts, on top
of the loan status derivation. A loan with an unknown due date is in
neither bucket.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from circulation.components.loan_status import LoanConfig, derive_loan_status
from circulation.components.temporal import ensure_utc
from circulation.domain import LoanRecord
from circulation.rules import Rules

from .models import ClassifyInput, DueWindowConfig, DueWindowResult


def classify_due_window(
    loans: Iterable[LoanRecord],
    now: datetime,
    window_days: int | None = None,
    config: DueWindowConfig | None = None,
    loan_config: LoanConfig | None = None,
) -> DueWindowResult:
    """
    Split loans into late and due-soon buckets.

    Args:
        loans: Loan records
        now: Current instant
        window_days: Lookahead in days (defaults to config.window_days)
        config: Due-window configuration
        loan_config: Loan configuration passed to the status derivation

    Returns:
        DueWindowResult; due_soon covers due dates in [now, now + window]

    Raises:
        ValueError: if window_days is negative
    """
    config = config or DueWindowConfig()
    days = config.window_days if window_days is None else window_days
    if days < 0:
        raise ValueError(f"window_days must be non-negative, got {days}")

    now = ensure_utc(now)
    horizon = now + timedelta(days=days)

    late: list[tuple[datetime, str, LoanRecord]] = []
    due_soon: list[tuple[datetime, str, LoanRecord]] = []

    for loan in loans:
        derived = derive_loan_status(loan, now, loan_config)
        due_at = derived.due_at
        if not isinstance(due_at, datetime):
            continue
        key = (due_at, str(loan.id), loan)
        if derived.effective_status == "late":
            late.append(key)
        elif derived.effective_status == "borrowed" and now <= due_at <= horizon:
            due_soon.append(key)

    late.sort(key=lambda item: (item[0], item[1]))
    due_soon.sort(key=lambda item: (item[0], item[1]))

    return DueWindowResult(
        late=tuple(item[2] for item in late),
        due_soon=tuple(item[2] for item in due_soon),
    )


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: ClassifyInput,
    config: DueWindowConfig | None = None,
    loan_config: LoanConfig | None = None,
) -> DueWindowResult:
    """Run due-window classification for the given input."""
    if isinstance(input_data, ClassifyInput):
        return classify_due_window(
            input_data.loans,
            input_data.now,
            input_data.window_days,
            config,
            loan_config,
        )

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def config_from_rules(rules: Rules) -> DueWindowConfig:
    """Build DueWindowConfig from the rules file."""
    return DueWindowConfig(window_days=rules.loans.due_window_days)
