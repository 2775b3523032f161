# dayplan/recurrence.py
"""Recurrence evaluation: is an event on the agenda for a given date?

Recurrence is always relative to the event's anchor date and never applies
backwards in time. Contradictory or unknown states evaluate to False.
"""

from __future__ import annotations

import calendar
import datetime as dt
from typing import Iterable, List, Union

from .model import Event, RepeatFrequency

DateLike = Union[dt.date, dt.datetime]


def _as_date(d: DateLike) -> dt.date:
    # datetime is a subclass of date; strip the time-of-day.
    if isinstance(d, dt.datetime):
        return d.date()
    return d


def is_last_day_of_month(d: dt.date) -> bool:
    return d.day == calendar.monthrange(d.year, d.month)[1]


def occurs_on_date(event: Event, target_date: DateLike) -> bool:
    base = _as_date(event.date)
    target = _as_date(target_date)

    if base == target:
        return True

    freq = event.repeat
    if freq is RepeatFrequency.NONE or target < base:
        return False

    diff_days = (target - base).days

    if freq is RepeatFrequency.DAILY:
        return diff_days >= 0

    if freq is RepeatFrequency.WEEKLY:
        return diff_days >= 0 and diff_days % 7 == 0

    if freq is RepeatFrequency.MONTHLY:
        months_apart = (target.year - base.year) * 12 + (target.month - base.month)
        if months_apart < 0:
            return False
        # Month-end anchors follow the month end (Jan 31 -> Feb 28/29, Apr 30).
        if is_last_day_of_month(base):
            return is_last_day_of_month(target)
        return target.day == base.day

    return False


def _start_sort_key(event: Event) -> tuple:
    # Timed events first by start; untimed events keep their relative order at the end.
    if event.start_time is None:
        return (1, 0, 0)
    return (0, event.start_time.hour, event.start_time.minute)


def events_for_date(events: Iterable[Event], target_date: DateLike) -> List[Event]:
    """Blocking (non-note) events occurring on `target_date`, ordered by start time."""
    target = _as_date(target_date)
    out = [e for e in events if e.blocks_time and occurs_on_date(e, target)]
    out.sort(key=_start_sort_key)
    return out
