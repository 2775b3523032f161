# dayplan/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Any, Optional, Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> dt.time:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return dt.time(hh, mm)


def parse_workhours(s: str) -> Tuple[dt.time, dt.time]:
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("workhours must be like 08:00-20:00")
    start = parse_hhmm(parts[0])
    end = parse_hhmm(parts[1])
    if end <= start:
        raise ValueError("workhours end must be after start")
    return start, end


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def coerce_time_of_day(v: Any) -> Optional[dt.time]:
    """Accept "HH:MM", {"hour": h, "minute": m} or a time; None when out of range."""
    if v is None:
        return None
    if isinstance(v, dt.time):
        return v.replace(second=0, microsecond=0, tzinfo=None)
    if isinstance(v, str):
        try:
            return parse_hhmm(v)
        except ValueError:
            return None
    if isinstance(v, dict):
        hh = v.get("hour")
        mm = v.get("minute")
        if isinstance(hh, bool) or isinstance(mm, bool):
            return None
        if isinstance(hh, (int, float)) and isinstance(mm, (int, float)):
            h, m = int(hh), int(mm)
            if 0 <= h <= 23 and 0 <= m <= 59:
                return dt.time(h, m)
    return None


def coerce_date(v: Any) -> Optional[dt.date]:
    """Accept a date, a datetime (time stripped) or an ISO string; None otherwise."""
    if isinstance(v, dt.datetime):
        return v.date()
    if isinstance(v, dt.date):
        return v
    if not isinstance(v, str) or not v.strip():
        return None
    s = v.strip()
    try:
        return dt.date.fromisoformat(s[:10])
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_hhmm(t: dt.time) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"
