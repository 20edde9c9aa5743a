# garage_billing/schemas/billing.py
from pydantic import BaseModel, Field
from typing import Literal, Optional


class RateScheduleIn(BaseModel):
    per_hour: int = Field(..., ge=0, alias="perHour")               # cents
    grace_minutes: int = Field(..., ge=0, alias="graceMinutes")

    class Config:
        populate_by_name = True


class ParkingEventIn(BaseModel):
    kind: Literal["enter", "exit"]
    plate: str
    timestamp: int       # minutes, same day


class BillingRequest(BaseModel):
    capacity: Optional[int] = Field(None, ge=0)       # falls back to DEFAULT_CAPACITY
    rates: Optional[RateScheduleIn] = None            # falls back to DEFAULT_* rates
    events: list[ParkingEventIn] = []


class ReceiptOut(BaseModel):
    plate: str
    minutes: int
    fee: int
    exited_at: int = Field(..., alias="exitedAt")

    class Config:
        populate_by_name = True


class InsideOut(BaseModel):
    since: int


class BillingReportOut(BaseModel):
    receipts: list[ReceiptOut]
    revenue: int
    inside: dict[str, InsideOut]
    errors: list[str]


class FeeQuoteRequest(BaseModel):
    minutes: int = Field(..., ge=0)
    rates: Optional[RateScheduleIn] = None


class FeeQuoteOut(BaseModel):
    minutes: int
    billed_hours: int = Field(..., alias="billedHours")
    fee: int

    class Config:
        populate_by_name = True
