from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EngineRules(BaseModel):
    slug: str = "library-status-engine"
    rules_version: str = "1"


class LoanRules(BaseModel):
    # Fixed loan period, used to synthesize a display-only borrow date
    period_days: int = Field(default=7, ge=1)
    due_window_days: int = Field(default=7, ge=0)


class BookingRules(BaseModel):
    venue_timezone: str = "Asia/Jakarta"
    allow_end_of_day: bool = True

    @field_validator("venue_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown IANA timezone: {value!r}") from e
        return value


class LoggingRules(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class Rules(BaseModel):
    engine: EngineRules = Field(default_factory=EngineRules)
    loans: LoanRules = Field(default_factory=LoanRules)
    bookings: BookingRules = Field(default_factory=BookingRules)
    logging: LoggingRules = Field(default_factory=LoggingRules)

    model_config = ConfigDict(extra="forbid")
