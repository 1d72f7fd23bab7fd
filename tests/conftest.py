from datetime import UTC, datetime
from typing import Any

import pytest

from circulation.adapters.clock import FrozenClock
from circulation.domain import BookingRecord, LoanRecord

# 2026-03-10 05:00 UTC is 12:00 in Asia/Jakarta
NOW = datetime(2026, 3, 10, 5, 0, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture
def make_loan():
    """Factory for loan records using the API's camelCase field names."""

    def _make(**fields: Any) -> LoanRecord:
        payload: dict[str, Any] = {
            "id": "loan-1",
            "status": "borrowed",
            "dueDate": "2026-03-14T05:00:00Z",
            "depositAmount": 25000,
            "paymentStatus": "paid",
        }
        payload.update(fields)
        return LoanRecord.model_validate(payload)

    return _make


@pytest.fixture
def make_booking():
    """Factory for booking records using the API's camelCase field names."""

    def _make(**fields: Any) -> BookingRecord:
        payload: dict[str, Any] = {
            "id": "booking-1",
            "status": "confirmed",
            "date": "2026-03-10",
            "startTime": "09:00",
            "endTime": "10:00",
        }
        payload.update(fields)
        return BookingRecord.model_validate(payload)

    return _make
