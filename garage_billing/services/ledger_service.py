# garage_billing/services/ledger_service.py
"""
Parking garage event-log billing.

How it works:
  - enter → denied if the garage is full (checked first) or the plate is
            already inside; otherwise the plate is recorded with its entry time
  - exit  → denied if the plate is not inside or the exit time precedes its
            entry; otherwise a Receipt is issued and the plate leaves
  - Events are applied strictly in input order. A denied event is recorded in
    `errors` and never aborts the run.
  - Each process_events() call owns a fresh LedgerState; nothing is shared
    between calls.
"""

from dataclasses import dataclass, field
from typing import Iterable
from garage_billing.config import settings
from garage_billing.exceptions import DenialReason, EntryDenied, ExitDenied, LedgerError
from garage_billing.services.event_parser import ENTER, ParkingEvent, parse_events
from garage_billing.services.fee_service import RateSchedule, compute_fee, default_rates
from garage_billing.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class OccupancyRecord:
    plate: str
    since: int


@dataclass(frozen=True)
class Receipt:
    plate: str
    minutes: int
    fee: int          # cents
    exited_at: int

    def to_dict(self) -> dict:
        return {"plate": self.plate, "minutes": self.minutes,
                "fee": self.fee, "exitedAt": self.exited_at}


@dataclass
class LedgerState:
    inside: dict[str, OccupancyRecord] = field(default_factory=dict)
    revenue: int = 0
    receipts: list[Receipt] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class BillingReport:
    receipts: list[Receipt]
    revenue: int
    inside: dict[str, OccupancyRecord]
    errors: list[str]

    def to_dict(self) -> dict:
        return {
            "receipts": [r.to_dict() for r in self.receipts],
            "revenue": self.revenue,
            "inside": {plate: {"since": rec.since} for plate, rec in self.inside.items()},
            "errors": list(self.errors),
        }


class ParkingLedger:
    """Occupancy + billing state for a single run over an event stream."""

    def __init__(self, capacity: int, rates: RateSchedule):
        self.capacity = capacity
        self.rates = rates
        self.state = LedgerState()

    @property
    def occupancy(self) -> int:
        return len(self.state.inside)

    def enter(self, plate: str, timestamp: int) -> OccupancyRecord:
        inside = self.state.inside
        # Capacity is checked before duplicates: a full garage reports "full"
        if len(inside) >= self.capacity:
            raise EntryDenied(plate, timestamp, DenialReason.CAPACITY_FULL)
        if plate in inside:
            raise EntryDenied(plate, timestamp, DenialReason.ALREADY_INSIDE)

        record = OccupancyRecord(plate=plate, since=timestamp)
        inside[plate] = record
        logger.debug(f"[ENTER] {plate} at {timestamp} | {len(inside)}/{self.capacity}")
        return record

    def exit(self, plate: str, timestamp: int) -> Receipt:
        record = self.state.inside.get(plate)
        if record is None:
            raise ExitDenied(plate, timestamp, DenialReason.NOT_INSIDE)
        if timestamp < record.since:
            # Record stays; a later exit with a valid time still succeeds
            raise ExitDenied(plate, timestamp, DenialReason.BEFORE_ENTRY)

        minutes = timestamp - record.since
        receipt = Receipt(plate=plate, minutes=minutes,
                          fee=compute_fee(minutes, self.rates), exited_at=timestamp)
        self.state.receipts.append(receipt)
        self.state.revenue += receipt.fee
        del self.state.inside[plate]
        logger.debug(f"[EXIT] {plate} at {timestamp} | {minutes} min | fee={receipt.fee}")
        return receipt

    def apply(self, event: ParkingEvent) -> None:
        """Apply one event, recording a denial instead of raising it."""
        try:
            if event.kind == ENTER:
                self.enter(event.plate, event.timestamp)
            else:
                self.exit(event.plate, event.timestamp)
        except LedgerError as e:
            self.state.errors.append(str(e))
            logger.warning(f"[DENIED][{e.reason.value.upper()}] {e}")

    def report(self) -> BillingReport:
        state = self.state
        return BillingReport(
            receipts=list(state.receipts),
            revenue=state.revenue,
            inside=dict(state.inside),
            errors=list(state.errors),
        )


def process_events(capacity: int, rates: RateSchedule, events: Iterable[ParkingEvent]) -> BillingReport:
    ledger = ParkingLedger(capacity, rates)
    count = 0
    for event in events:
        ledger.apply(event)
        count += 1

    report = ledger.report()
    logger.info(
        f"Billed {count} events: {len(report.receipts)} receipts, "
        f"revenue={report.revenue}, inside={len(report.inside)}, errors={len(report.errors)}"
    )
    return report


def process_parking(payload: dict) -> dict:
    """
    Run the engine on a plain-data payload:
        {"capacity": int, "rates": {"perHour": int, "graceMinutes": int},
         "events": [["enter", plate, t] | {"kind", "plate", "timestamp"}, ...]}
    and return the report as plain data. Missing capacity or rates fall back
    to the configured defaults, as over HTTP.
    """
    capacity = payload.get("capacity")
    if capacity is None:
        capacity = settings.DEFAULT_CAPACITY
    rates = RateSchedule.from_dict(payload["rates"]) if payload.get("rates") else default_rates()
    events = parse_events(payload.get("events") or [])
    return process_events(int(capacity), rates, events).to_dict()
