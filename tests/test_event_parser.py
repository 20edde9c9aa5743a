# tests/test_event_parser.py
"""Unit tests for the event parser module."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from garage_billing.exceptions import EventParseError
from garage_billing.services.event_parser import (
    ParkingEvent,
    parse_event,
    parse_event_log,
    parse_events,
)


class TestRecordParsing:
    """Structured records: tagged dicts and positional triples."""

    def test_tagged_record(self):
        event = parse_event({"kind": "enter", "plate": "ABC123", "timestamp": 5})
        assert event == ParkingEvent(kind="enter", plate="ABC123", timestamp=5)

    def test_type_and_t_keys(self):
        event = parse_event({"type": "exit", "plate": "XYZ999", "t": 100})
        assert event.kind == "exit"
        assert event.timestamp == 100

    def test_positional_triple(self):
        event = parse_event(["exit", "GHOST", 50])
        assert event == ParkingEvent(kind="exit", plate="GHOST", timestamp=50)

    def test_tuple_triple(self):
        assert parse_event(("enter", "A1", 0)).plate == "A1"

    def test_kind_is_case_insensitive(self):
        assert parse_event(["ENTER", "A1", 0]).kind == "enter"

    def test_plate_case_preserved(self):
        assert parse_event(["enter", "abc123", 0]).plate == "abc123"

    def test_negative_timestamp_accepted(self):
        assert parse_event(["enter", "A1", -30]).timestamp == -30

    def test_integral_float_timestamp(self):
        assert parse_event(["enter", "A1", 12.0]).timestamp == 12

    def test_empty_plate_accepted(self):
        assert parse_event(["enter", "", 0]) == ParkingEvent(kind="enter", plate="", timestamp=0)
        assert parse_event({"kind": "exit", "plate": "", "timestamp": 4}).plate == ""

    def test_missing_plate_rejected(self):
        with pytest.raises(EventParseError):
            parse_event({"kind": "enter", "timestamp": 0})

    def test_event_passthrough(self):
        event = ParkingEvent(kind="enter", plate="A1", timestamp=0)
        assert parse_event(event) is event

    def test_to_dict(self):
        event = ParkingEvent(kind="exit", plate="A1", timestamp=3)
        assert event.to_dict() == {"kind": "exit", "plate": "A1", "timestamp": 3}


class TestRecordErrors:
    @pytest.mark.parametrize("raw", [
        ["park", "A1", 0],
        ["enter", "A1"],
        ["enter", "A1", "soon"],
        ["enter", "A1", 1.5],
        ["enter", "A1", True],
        {"kind": "enter", "plate": "A1"},
        42,
    ])
    def test_malformed_record_rejected(self, raw):
        with pytest.raises(EventParseError):
            parse_event(raw)

    def test_parse_events_reports_position(self):
        with pytest.raises(EventParseError, match="event #1"):
            parse_events([["enter", "A1", 0], ["leave", "A1", 5]])

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_event(["enter", "A1", "x"])


class TestLogParsing:
    def test_log_lines(self):
        log = """
        # morning shift
        enter ABC123 0
        enter XYZ999 5   # second car
        exit  ABC123 20
        """
        events = parse_event_log(log)
        assert [e.kind for e in events] == ["enter", "enter", "exit"]
        assert events[1] == ParkingEvent(kind="enter", plate="XYZ999", timestamp=5)

    def test_hash_inside_plate_is_not_a_comment(self):
        events = parse_event_log("enter AB#1 0  # gate 2\nexit AB#1 30\n")
        assert [e.plate for e in events] == ["AB#1", "AB#1"]
        assert events[1].timestamp == 30

    def test_single_line_string_record(self):
        assert parse_event("exit C3 110") == ParkingEvent(kind="exit", plate="C3", timestamp=110)

    def test_bad_line_reports_line_number(self):
        with pytest.raises(EventParseError, match="line 2"):
            parse_event_log("enter A1 0\nexit A1\n")

    def test_empty_log(self):
        assert parse_event_log("\n# nothing\n") == []
