# dayplan/search.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List

from .date_query import parse_date_query
from .model import Event


def _start_min(e: Event) -> int:
    if e.start_time is None:
        return -1
    return e.start_time.hour * 60 + e.start_time.minute


def newest_first(events: Iterable[Event]) -> List[Event]:
    """Most recent anchor date first; within a day, later start first, untimed last."""
    return sorted(events, key=lambda e: (e.date, _start_min(e)), reverse=True)


def _keyword_hit(e: Event, needle: str) -> bool:
    for hay in (e.title, e.description, e.category, e.kind.label):
        if needle in (hay or "").lower():
            return True
    return False


def filter_events(events: Iterable[Event], query: str, now: dt.date) -> List[Event]:
    """Search events by date-like text and by keyword.

    When the query reads as a date and some events fall on it, those come
    first, followed by keyword-only hits. Each event appears at most once.
    """
    ordered = newest_first(events)
    q = (query or "").strip()
    if not q:
        return ordered

    dq = parse_date_query(q, now)
    needle = q.lower()

    seen: set[int] = set()
    date_hits: List[Event] = []
    keyword_hits: List[Event] = []
    for e in ordered:
        if dq is not None and dq.matches(e.date) and id(e) not in seen:
            seen.add(id(e))
            date_hits.append(e)
        if _keyword_hit(e, needle) and id(e) not in seen:
            seen.add(id(e))
            keyword_hits.append(e)

    if dq is not None and date_hits:
        return date_hits + keyword_hits
    return keyword_hits if keyword_hits else date_hits
