# dayplan/normalize.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .model import Event, EventKind, RepeatFrequency
from .util.console import eprint, obs_enabled
from .util.jsonio import loads
from .util.timeparse import coerce_date, coerce_time_of_day


class EventLoadError(ValueError):
    """Raised when an events file does not have a usable top-level shape."""


def _first(t: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in t and t[k] is not None:
            return t[k]
    return None


def event_from_dict(t: Dict[str, Any]) -> Optional[Event]:
    """Build an Event from a plain mapping; None when the record has no usable date.

    Both snake_case and the camelCase keys of stored records are accepted
    (start_time/startTime, repeat/repeatFrequency, kind/type).
    """
    if not isinstance(t, dict):
        return None

    ident = str(t.get("id") or "").strip()
    date_raw = t.get("date")
    date = coerce_date(date_raw)
    if date is None:
        if obs_enabled():
            eprint(f"[dayplan.normalize] WARN: skipping event without usable date id={ident!r} value={date_raw!r}")
        return None

    start_raw = _first(t, "start_time", "startTime")
    end_raw = _first(t, "end_time", "endTime")
    start = coerce_time_of_day(start_raw)
    end = coerce_time_of_day(end_raw)
    if obs_enabled():
        if start_raw is not None and start is None:
            eprint(f"[dayplan.normalize] WARN: invalid start time id={ident!r} value={start_raw!r}")
        if end_raw is not None and end is None:
            eprint(f"[dayplan.normalize] WARN: invalid end time id={ident!r} value={end_raw!r}")

    completed = t.get("is_completed", t.get("isCompleted"))
    if isinstance(completed, str):
        completed = completed.strip().lower() in {"1", "true", "yes"}

    return Event(
        date=date,
        start_time=start,
        end_time=end,
        repeat=RepeatFrequency.from_name(_first(t, "repeat", "repeatFrequency")),
        kind=EventKind.from_name(_first(t, "kind", "type")),
        id=ident,
        title=str(t.get("title") or ""),
        description=str(t.get("description") or ""),
        category=str(t.get("category") or "General"),
        is_completed=bool(completed),
    )


def events_from_obj(obj: Any) -> List[Event]:
    if isinstance(obj, dict):
        obj = obj.get("events")
    if not isinstance(obj, list):
        raise EventLoadError("events must be a JSON list or an object with an 'events' list")
    out: List[Event] = []
    for raw in obj:
        ev = event_from_dict(raw)
        if ev is not None:
            out.append(ev)
    return out


def load_events(path: Union[str, Path]) -> List[Event]:
    p = Path(path)
    return events_from_obj(loads(p.read_text(encoding="utf-8", errors="replace")))
