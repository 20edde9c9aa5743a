# garage_billing/exceptions.py
"""
Error types for the billing engine.

Denials (EntryDenied / ExitDenied) are soft, per-event errors: the ledger
raises them from a single transition and records str(exc) in the report.
EventParseError is a boundary error for malformed input records.
"""

from enum import Enum


class DenialReason(str, Enum):
    CAPACITY_FULL = "capacity_full"
    ALREADY_INSIDE = "already_inside"
    NOT_INSIDE = "not_inside"
    BEFORE_ENTRY = "before_entry"


class LedgerError(Exception):
    """Base class for a rejected enter/exit event."""

    action = "event"

    def __init__(self, plate: str, timestamp: int, reason: DenialReason):
        self.plate = plate
        self.timestamp = timestamp
        self.reason = reason
        super().__init__(self._message())

    def _message(self) -> str:
        if self.reason == DenialReason.CAPACITY_FULL:
            detail = f"capacity full for {self.plate}"
        elif self.reason == DenialReason.ALREADY_INSIDE:
            detail = f"{self.plate} already inside"
        elif self.reason == DenialReason.NOT_INSIDE:
            detail = f"{self.plate} not inside"
        else:
            detail = f"{self.plate} before entry"
        return f"{self.action} denied: {detail} at {self.timestamp}"


class EntryDenied(LedgerError):
    action = "enter"


class ExitDenied(LedgerError):
    action = "exit"


class EventParseError(ValueError):
    """Raised when a raw event record or log line cannot be understood."""
