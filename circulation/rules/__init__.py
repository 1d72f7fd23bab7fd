"""Rules file loading and validation."""

from .loader import DEFAULT_RULES_PATH, load_rules
from .models import BookingRules, EngineRules, LoanRules, LoggingRules, Rules

__all__ = [
    "DEFAULT_RULES_PATH",
    "BookingRules",
    "EngineRules",
    "LoanRules",
    "LoggingRules",
    "Rules",
    "load_rules",
]
