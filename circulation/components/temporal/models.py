"""
Temporal component models.

`Invalid` stands for "unknown". It is falsy and deliberately not orderable,
so an unknown timestamp can never leak into a comparison or a sort key.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

InvalidReason = Literal["absent", "malformed"]


@dataclass(frozen=True)
class Invalid:
    """Sentinel for a missing or unparseable value."""

    reason: InvalidReason = "malformed"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Invalid({self.reason})"


ABSENT = Invalid("absent")
MALFORMED = Invalid("malformed")

MaybeInstant = datetime | Invalid
MaybeAmount = int | Invalid
