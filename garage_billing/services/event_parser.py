# garage_billing/services/event_parser.py
"""
Parses raw gate events into ParkingEvent records.
Accepts tagged dicts, positional triples, and plain-text log lines,
and returns a unified ParkingEvent regardless of source.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Iterable, Optional
from garage_billing.exceptions import EventParseError
from garage_billing.utils.logger import get_logger

logger = get_logger(__name__)

# "#" opens a comment only at line start or after whitespace; plates may contain it
COMMENT_RE = re.compile(r"(?:^|\s)#")

ENTER = "enter"
EXIT = "exit"
EVENT_KINDS = (ENTER, EXIT)


@dataclass(frozen=True)
class ParkingEvent:
    kind: str           # enter | exit
    plate: str          # case-sensitive
    timestamp: int      # minutes, same day

    def to_dict(self) -> dict:
        return {"kind": self.kind, "plate": self.plate, "timestamp": self.timestamp}


def _parse_kind(value) -> str:
    if not isinstance(value, str) or value.strip().lower() not in EVENT_KINDS:
        raise EventParseError(f"unknown event kind: {value!r}")
    return value.strip().lower()


def _parse_plate(value) -> str:
    if not isinstance(value, str):
        raise EventParseError(f"plate must be a string, got {value!r}")
    return value


def _parse_timestamp(value) -> int:
    # bool is an int subclass; True is not a timestamp
    if isinstance(value, bool):
        raise EventParseError(f"timestamp must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise EventParseError(f"timestamp must be an integer, got {value!r}")


def _parse_mapping(raw: Mapping) -> ParkingEvent:
    kind = raw.get("kind", raw.get("type"))
    timestamp = raw.get("timestamp", raw.get("t"))
    if timestamp is None:
        raise EventParseError(f"event has no timestamp: {dict(raw)!r}")
    return ParkingEvent(
        kind=_parse_kind(kind),
        plate=_parse_plate(raw.get("plate")),
        timestamp=_parse_timestamp(timestamp),
    )


def _parse_sequence(raw: Sequence) -> ParkingEvent:
    if len(raw) != 3:
        raise EventParseError(f"expected [kind, plate, timestamp], got {list(raw)!r}")
    kind, plate, timestamp = raw
    return ParkingEvent(
        kind=_parse_kind(kind),
        plate=_parse_plate(plate),
        timestamp=_parse_timestamp(timestamp),
    )


def parse_event_line(line: str) -> Optional[ParkingEvent]:
    """Parse 'enter ABC123 0'. Returns None for blank lines and # comments."""
    text = COMMENT_RE.split(line, maxsplit=1)[0].strip()
    if not text:
        return None
    parts = text.split()
    if len(parts) != 3:
        raise EventParseError(f"expected '<kind> <plate> <timestamp>', got {line.strip()!r}")
    return _parse_sequence(parts)


def parse_event(raw) -> ParkingEvent:
    """Auto-detect the record shape and parse accordingly."""
    if isinstance(raw, ParkingEvent):
        return raw
    if isinstance(raw, Mapping):
        return _parse_mapping(raw)
    if isinstance(raw, str):
        event = parse_event_line(raw)
        if event is None:
            raise EventParseError("empty event line")
        return event
    if isinstance(raw, Sequence):
        return _parse_sequence(raw)
    raise EventParseError(f"unsupported event record: {raw!r}")


def parse_events(raw_events: Iterable) -> list[ParkingEvent]:
    """Parse every record, reporting the position of the first bad one."""
    events = []
    for index, raw in enumerate(raw_events):
        try:
            events.append(parse_event(raw))
        except EventParseError as e:
            raise EventParseError(f"event #{index}: {e}") from e
    return events


def parse_event_log(text: str) -> list[ParkingEvent]:
    """Parse a whole text log, one event per line."""
    events = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        try:
            event = parse_event_line(line)
        except EventParseError as e:
            raise EventParseError(f"line {lineno}: {e}") from e
        if event is not None:
            events.append(event)
    logger.debug(f"Parsed {len(events)} events from log")
    return events
