# scripts/run_ledger.py
"""
Bill an event log locally and print the JSON report.

Log format: one event per line, '<enter|exit> <plate> <minute>'; '#' starts a comment.
Usage: python scripts/run_ledger.py events.log --capacity 2 --per-hour 300 --grace 15
"""

import argparse
import json
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from garage_billing.config import settings
from garage_billing.exceptions import EventParseError
from garage_billing.services.event_parser import parse_event_log
from garage_billing.services.fee_service import RateSchedule
from garage_billing.services.ledger_service import process_events


def main(argv=None):
    parser = argparse.ArgumentParser(description="Bill a parking event log")
    parser.add_argument("log", help="event log file, or '-' for stdin")
    parser.add_argument("--capacity", type=int, default=settings.DEFAULT_CAPACITY)
    parser.add_argument("--per-hour", type=int, default=settings.DEFAULT_PER_HOUR)
    parser.add_argument("--grace", type=int, default=settings.DEFAULT_GRACE_MINUTES)
    args = parser.parse_args(argv)

    if args.log == "-":
        text = sys.stdin.read()
    else:
        with open(args.log, encoding="utf-8") as f:
            text = f.read()

    try:
        events = parse_event_log(text)
    except EventParseError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    rates = RateSchedule(per_hour=args.per_hour, grace_minutes=args.grace)
    report = process_events(args.capacity, rates, events)
    print(json.dumps(report.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
