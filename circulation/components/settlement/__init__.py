"""
Settlement component - Fine and deposit outcome of a loan.
"""

from .component import (
    clamp_fine,
    derive_deposit_outcome,
    preview_return,
    run,
    settle,
)
from .models import (
    DepositOutcome,
    FineSource,
    PreviewReturnInput,
    ReturnPreview,
    SettleInput,
    Settlement,
)

__all__ = [
    # Entry points
    "clamp_fine",
    "derive_deposit_outcome",
    "preview_return",
    "run",
    "settle",
    # Input models
    "PreviewReturnInput",
    "SettleInput",
    # Output models
    "DepositOutcome",
    "FineSource",
    "ReturnPreview",
    "Settlement",
]
