# garage_billing/services/fee_service.py
"""
Parking fee calculation.

Minutes up to and including the grace period are free. Anything beyond it
is billed in whole hours, rounded up: 1 minute over grace bills one hour.
All amounts are integer cents; no floating point is involved.
"""

from dataclasses import dataclass
from garage_billing.config import settings

MINUTES_PER_HOUR = 60


@dataclass(frozen=True)
class RateSchedule:
    per_hour: int          # cents per billed hour
    grace_minutes: int     # minutes parked at or below this are free

    @classmethod
    def from_dict(cls, data: dict) -> "RateSchedule":
        """Build from the wire shape {perHour, graceMinutes} (snake_case also accepted)."""
        per_hour = data.get("perHour", data.get("per_hour", 0))
        grace = data.get("graceMinutes", data.get("grace_minutes", 0))
        return cls(per_hour=int(per_hour), grace_minutes=int(grace))

    def to_dict(self) -> dict:
        return {"perHour": self.per_hour, "graceMinutes": self.grace_minutes}


def default_rates() -> RateSchedule:
    """Rate schedule applied when a caller supplies none."""
    return RateSchedule(per_hour=settings.DEFAULT_PER_HOUR,
                        grace_minutes=settings.DEFAULT_GRACE_MINUTES)


def billed_hours(minutes_parked: int, rates: RateSchedule) -> int:
    """Number of whole hours charged for a stay of minutes_parked."""
    if minutes_parked <= rates.grace_minutes:
        return 0
    billable = minutes_parked - rates.grace_minutes
    return -(-billable // MINUTES_PER_HOUR)  # ceiling division


def compute_fee(minutes_parked: int, rates: RateSchedule) -> int:
    return rates.per_hour * billed_hours(minutes_parked, rates)
