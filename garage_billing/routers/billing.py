# garage_billing/routers/billing.py
"""
Billing endpoints.
POST /billing/process — run an event log through the ledger, return the report.
POST /billing/fee     — quote the fee for a single stay length.
"""

from fastapi import APIRouter, HTTPException
from typing import Optional
from garage_billing.config import settings
from garage_billing.schemas.billing import (
    BillingReportOut,
    BillingRequest,
    FeeQuoteOut,
    FeeQuoteRequest,
    RateScheduleIn,
)
from garage_billing.services.event_parser import ParkingEvent
from garage_billing.services.fee_service import RateSchedule, billed_hours, compute_fee, default_rates
from garage_billing.services.ledger_service import process_events
from garage_billing.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _resolve_rates(rates: Optional[RateScheduleIn]) -> RateSchedule:
    if rates is None:
        return default_rates()
    return RateSchedule(per_hour=rates.per_hour, grace_minutes=rates.grace_minutes)


@router.post("/billing/process", response_model=BillingReportOut, summary="Bill an event log")
async def process_billing(body: BillingRequest):
    """
    Applies every event in order and returns receipts, revenue, vehicles
    still inside, and one error string per denied event.
    Denied events never fail the request.
    """
    if len(body.events) > settings.MAX_EVENTS_PER_REQUEST:
        raise HTTPException(
            status_code=413,
            detail=f"Too many events: {len(body.events)} > {settings.MAX_EVENTS_PER_REQUEST}",
        )

    capacity = settings.DEFAULT_CAPACITY if body.capacity is None else body.capacity
    rates = _resolve_rates(body.rates)
    events = [ParkingEvent(kind=e.kind, plate=e.plate, timestamp=e.timestamp) for e in body.events]
    logger.info(f"Billing run | capacity={capacity} | rates={rates.to_dict()} | {len(events)} events")

    return process_events(capacity, rates, events).to_dict()


@router.post("/billing/fee", response_model=FeeQuoteOut, summary="Quote a parking fee")
def quote_fee(body: FeeQuoteRequest):
    """Fee for a stay of `minutes`, using the given or default rates."""
    rates = _resolve_rates(body.rates)
    return {
        "minutes": body.minutes,
        "billedHours": billed_hours(body.minutes, rates),
        "fee": compute_fee(body.minutes, rates),
    }
