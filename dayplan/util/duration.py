# dayplan/util/duration.py
from __future__ import annotations

import datetime as dt


def format_duration(d: dt.timedelta) -> str:
    """Short label like "1 h 30 m", "2 h" or "45 m" (seconds are dropped)."""
    total_min = max(0, int(d.total_seconds() // 60))
    hours, minutes = divmod(total_min, 60)
    if hours > 0 and minutes > 0:
        return f"{hours} h {minutes} m"
    if hours > 0:
        return f"{hours} h"
    return f"{minutes} m"


def format_clock(t: dt.time | dt.datetime) -> str:
    # 12-hour clock without ":00" on the hour: "1PM", "1:30PM", "12AM".
    hour = t.hour % 12 or 12
    ampm = "PM" if t.hour >= 12 else "AM"
    if t.minute == 0:
        return f"{hour}{ampm}"
    return f"{hour}:{t.minute:02d}{ampm}"
