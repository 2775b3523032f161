from __future__ import annotations

import argparse
import datetime as dt
import os
from typing import Any, Dict, List

from .date_query import parse_date_query
from .interval import free_slots_by_day, scheduled_hours, total_free, week_of
from .model import DayWindow, Event, TimeSlot
from .normalize import load_events
from .recurrence import events_for_date
from .search import filter_events
from .util.duration import format_clock, format_duration
from .util.jsonio import dumps
from .util.timeparse import format_hhmm, parse_date_yyyy_mm_dd, parse_workhours


def _event_row(e: Event) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "id": e.id,
        "title": e.title,
        "date": e.date.isoformat(),
        "kind": e.kind.value,
        "repeat": e.repeat.value,
        "category": e.category,
    }
    if e.has_time_range:
        row["start_time"] = format_hhmm(e.start_time)  # type: ignore[arg-type]
        row["end_time"] = format_hhmm(e.end_time)  # type: ignore[arg-type]
    else:
        row["all_day"] = True
    return row


def _slot_row(s: TimeSlot) -> Dict[str, Any]:
    return {
        "start": s.start.isoformat(timespec="minutes"),
        "end": s.end.isoformat(timespec="minutes"),
        "duration": format_duration(s.duration),
        "label": f"{format_clock(s.start)} - {format_clock(s.end)}",
    }


def _parse_day(raw: str | None, flag: str) -> dt.date:
    if not raw:
        return dt.date.today()
    try:
        return parse_date_yyyy_mm_dd(raw)
    except ValueError:
        raise SystemExit(f"Invalid {flag} value (expected YYYY-MM-DD): {raw!r}")


def _load(path: str) -> List[Event]:
    try:
        return load_events(path)
    except Exception as e:
        raise SystemExit(f"Failed to load events: {e}")


def cmd_agenda(args: argparse.Namespace) -> Dict[str, Any]:
    day = _parse_day(args.date, "--date")
    events = _load(args.events)
    return {
        "date": day.isoformat(),
        "events": [_event_row(e) for e in events_for_date(events, day)],
    }


def cmd_free(args: argparse.Namespace) -> Dict[str, Any]:
    day = _parse_day(args.date, "--date")
    try:
        start, end = parse_workhours(args.workhours)
    except ValueError as e:
        raise SystemExit(f"Invalid --workhours value: {e}")
    window = DayWindow(start=start, end=end)
    events = _load(args.events)

    days_out = []
    for d, slots in free_slots_by_day(events, week_of(day, days=args.days), window):
        days_out.append(
            {
                "date": d.isoformat(),
                "total": format_duration(total_free(slots)),
                "scheduled_hours": scheduled_hours(events_for_date(events, d)),
                "slots": [_slot_row(s) for s in slots],
            }
        )
    return {"workhours": f"{format_hhmm(start)}-{format_hhmm(end)}", "days": days_out}


def cmd_search(args: argparse.Namespace) -> Dict[str, Any]:
    today = _parse_day(args.today, "--today")
    events = _load(args.events)
    dq = parse_date_query(args.query, today)
    out: Dict[str, Any] = {"query": args.query, "date_query": None}
    if dq is not None:
        out["date_query"] = {"year": dq.year, "month": dq.month, "day": dq.day}
    out["results"] = [_event_row(e) for e in filter_events(events, args.query, today)]
    return out


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="dayplan",
        description="Inspect a planner's events: daily agenda, free time, and date-aware search.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("agenda", help="Events occurring on a date (recurrence applied)")
    p.add_argument("events", help="Events JSON file (list, or object with an 'events' list)")
    p.add_argument("--date", default=None, help="Date YYYY-MM-DD (default: today)")
    p.set_defaults(func=cmd_agenda)

    p = sub.add_parser("free", help="Open time slots per day")
    p.add_argument("events", help="Events JSON file (list, or object with an 'events' list)")
    p.add_argument("--date", default=None, help="First date YYYY-MM-DD (default: today)")
    p.add_argument("--days", type=int, default=1, help="Number of days to report (default: 1)")
    p.add_argument(
        "--workhours",
        default=os.getenv("DAYPLAN_WORKHOURS", "08:00-20:00"),
        help="Day window, e.g. 08:00-20:00 (default: env DAYPLAN_WORKHOURS or 08:00-20:00)",
    )
    p.set_defaults(func=cmd_free)

    p = sub.add_parser("search", help="Search by keyword or loose date text")
    p.add_argument("events", help="Events JSON file (list, or object with an 'events' list)")
    p.add_argument("query", help='Search text, e.g. "sep 2", "2025-09", "tomorrow", "dentist"')
    p.add_argument("--today", default=None, help="Reference date YYYY-MM-DD for relative words (default: today)")
    p.set_defaults(func=cmd_search)

    return ap


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    print(dumps(args.func(args)))


if __name__ == "__main__":
    main()
