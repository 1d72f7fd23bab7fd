from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
LoanStatus = Literal["borrowed", "late", "returned"]
PaymentStatus = Literal["paid", "unpaid"]
RefundStatus = Literal["pending", "refunded", "forfeited"]
RawBookingStatus = Literal["pending_payment", "confirmed", "cancelled"]
DisplayStatus = Literal["pending_payment", "confirmed", "completed", "cancelled"]

LOAN_STATUSES: frozenset[str] = frozenset(get_args(LoanStatus))
PAYMENT_STATUSES: frozenset[str] = frozenset(get_args(PaymentStatus))
REFUND_STATUSES: frozenset[str] = frozenset(get_args(RefundStatus))
RAW_BOOKING_STATUSES: frozenset[str] = frozenset(get_args(RawBookingStatus))


def status_text(value: Any) -> str:
    """Lower-cased, stripped status string; "" for None and non-string values."""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


# Records arrive as fetched from the API. Every field is kept as the raw
# value; the components decide whether it is usable.


class LoanRecord(BaseModel):
    id: Any = None
    status: Any = None
    borrow_date: Any = Field(default=None, alias="borrowDate")
    due_date: Any = Field(default=None, alias="dueDate")
    return_date: Any = Field(default=None, alias="returnDate")
    deposit_amount: Any = Field(default=0, alias="depositAmount")
    fine_amount: Any = Field(default=None, alias="fineAmount")
    payment_status: Any = Field(default=None, alias="paymentStatus")
    refund_status: Any = Field(default=None, alias="refundStatus")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class BookingRecord(BaseModel):
    id: Any = None
    status: Any = None
    date: Any = None
    start_time: Any = Field(default=None, alias="startTime")
    end_time: Any = Field(default=None, alias="endTime")
    cancelled_at: Any = Field(default=None, alias="cancelledAt")
    created_at: Any = Field(default=None, alias="createdAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
