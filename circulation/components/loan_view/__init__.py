"""
Loan view component - Status and settlement composed for loan screens.
"""

from .component import days_until_due, derive_loan_view, display_key, filter_loans, run
from .models import (
    DeriveLoanViewInput,
    DerivedLoanView,
    FilterLoansInput,
    LoanDisplayKey,
    LoanFilter,
)

__all__ = [
    # Entry points
    "days_until_due",
    "derive_loan_view",
    "display_key",
    "filter_loans",
    "run",
    # Input models
    "DeriveLoanViewInput",
    "FilterLoansInput",
    # Output models
    "DerivedLoanView",
    "LoanDisplayKey",
    "LoanFilter",
]
