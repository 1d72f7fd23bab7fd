"""
Due-window component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from circulation.domain import LoanRecord

# --- Configuration ---


@dataclass(frozen=True)
class DueWindowConfig:
    """Due-window configuration from rules."""

    window_days: int = 7


# --- Input Models ---


@dataclass(frozen=True)
class ClassifyInput:
    """Input for bucketing loans for the dashboard banner."""

    loans: tuple[LoanRecord, ...]
    now: datetime
    window_days: int | None = None


# --- Output Models ---


@dataclass(frozen=True)
class DueWindowResult:
    """Late and due-soon buckets, each sorted by due date then id."""

    late: tuple[LoanRecord, ...]
    due_soon: tuple[LoanRecord, ...]
