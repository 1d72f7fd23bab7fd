"""
Due-window component - Late / due-soon buckets for dashboard alerts.
"""

from .component import classify_due_window, config_from_rules, run
from .models import ClassifyInput, DueWindowConfig, DueWindowResult

__all__ = [
    "classify_due_window",
    "config_from_rules",
    "run",
    "ClassifyInput",
    "DueWindowConfig",
    "DueWindowResult",
]
