"""dayplan.api

Stable *library* entrypoint for dayplan.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
  - "Now" is always passed in; nothing here reads the clock.
"""

from __future__ import annotations

from dayplan.date_query import DateQuery, guess_picker_date, month_from_prefix, parse_date_query, safe_date
from dayplan.interval import free_slots, free_slots_by_day, merge_slots, scheduled_hours, total_free, week_of
from dayplan.model import DayWindow, Event, EventKind, RepeatFrequency, TimeSlot, blocks_time
from dayplan.normalize import EventLoadError, event_from_dict, events_from_obj, load_events
from dayplan.recurrence import events_for_date, is_last_day_of_month, occurs_on_date
from dayplan.search import filter_events


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "DateQuery",
    "DayWindow",
    "Event",
    "EventKind",
    "EventLoadError",
    "RepeatFrequency",
    "TimeSlot",
    "blocks_time",
    "event_from_dict",
    "events_for_date",
    "events_from_obj",
    "filter_events",
    "free_slots",
    "free_slots_by_day",
    "guess_picker_date",
    "is_last_day_of_month",
    "load_events",
    "merge_slots",
    "month_from_prefix",
    "occurs_on_date",
    "parse_date_query",
    "safe_date",
    "scheduled_hours",
    "total_free",
    "week_of",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
