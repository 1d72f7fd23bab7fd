"""
Loan status component - Live status of a loan (borrowed / late / returned).
"""

from .component import config_from_rules, derive_loan_status, resolve_borrowed_at, run
from .models import DeriveLoanStatusInput, LoanConfig, LoanStatusResult

__all__ = [
    # Entry points
    "derive_loan_status",
    "resolve_borrowed_at",
    "run",
    "config_from_rules",
    # Models
    "DeriveLoanStatusInput",
    "LoanConfig",
    "LoanStatusResult",
]
