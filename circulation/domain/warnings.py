"""
Non-fatal derivation warnings.

Malformed or contradictory records never raise; the problem is reported as a
warning on the derived output so callers can surface it to operators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

WarningKind = Literal["invalid_input", "inconsistent_record", "precision"]


@dataclass(frozen=True)
class DerivationWarning:
    """A problem found while deriving a view from a record."""

    kind: WarningKind
    code: str
    message: str
    field: str | None = None


def invalid_input(code: str, message: str, field: str | None = None) -> DerivationWarning:
    return DerivationWarning(kind="invalid_input", code=code, message=message, field=field)


def inconsistent(code: str, message: str, field: str | None = None) -> DerivationWarning:
    return DerivationWarning(kind="inconsistent_record", code=code, message=message, field=field)


def precision(code: str, message: str, field: str | None = None) -> DerivationWarning:
    return DerivationWarning(kind="precision", code=code, message=message, field=field)
