import logging
from dataclasses import dataclass
from pathlib import Path

from circulation.components.booking_status import BookingConfig
from circulation.components.booking_status import config_from_rules as booking_config_from_rules
from circulation.components.due_window import DueWindowConfig
from circulation.components.due_window import config_from_rules as due_window_config_from_rules
from circulation.components.loan_status import LoanConfig
from circulation.components.loan_status import config_from_rules as loan_config_from_rules
from circulation.rules import DEFAULT_RULES_PATH, Rules, load_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Component configs built from one rules file."""

    loans: LoanConfig
    bookings: BookingConfig
    due_window: DueWindowConfig

    @classmethod
    def from_rules(cls, rules: Rules) -> "EngineConfig":
        return cls(
            loans=loan_config_from_rules(rules),
            bookings=booking_config_from_rules(rules),
            due_window=due_window_config_from_rules(rules),
        )


def resolve_rules(path: Path | None = None) -> Rules:
    """
    Load rules from path, or from ./rules.yaml when present.
    Falls back to built-in defaults when no file is given or found.
    """
    if path is not None:
        return load_rules(path)
    if DEFAULT_RULES_PATH.exists():
        return load_rules(DEFAULT_RULES_PATH)
    logger.info("No rules file found; using built-in defaults")
    return Rules()


def configure_logging(rules: Rules) -> None:
    logging.basicConfig(
        level=getattr(logging, rules.logging.level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
