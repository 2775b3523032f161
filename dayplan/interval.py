# dayplan/interval.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence, Tuple

from .model import DayWindow, Event, TimeSlot
from .recurrence import events_for_date

_ZERO = dt.timedelta(0)


def merge_slots(slots: Iterable[TimeSlot]) -> List[TimeSlot]:
    """Union of busy slots, sorted by start.

    Slots that merely touch (next.start == cur.end) stay separate; only a
    start strictly before the running end extends it. Re-merging the result
    returns it unchanged.
    """
    ordered = sorted((s for s in slots if s.end > s.start), key=lambda s: s.start)
    if not ordered:
        return []
    out: List[TimeSlot] = []
    cur_s, cur_e = ordered[0].start, ordered[0].end
    for s in ordered[1:]:
        if s.start < cur_e:
            cur_e = max(cur_e, s.end)
        else:
            out.append(TimeSlot(cur_s, cur_e))
            cur_s, cur_e = s.start, s.end
    out.append(TimeSlot(cur_s, cur_e))
    return out


def _subtract(base: TimeSlot, blocks: Sequence[TimeSlot]) -> List[TimeSlot]:
    """Gaps of `base` not covered by merged, sorted `blocks`."""
    a, b = base.start, base.end
    out: List[TimeSlot] = []
    cur = a
    for blk in blocks:
        if blk.start > cur:
            out.append(TimeSlot(cur, min(blk.start, b)))
        cur = max(cur, blk.end)
        if cur >= b:
            break
    if cur < b:
        out.append(TimeSlot(cur, b))
    return [s for s in out if s.end > s.start]


def _busy_slot(event: Event, day: dt.date) -> Optional[TimeSlot]:
    if not event.has_time_range:
        return None
    slot = TimeSlot.on_date(day, event.start_time, event.end_time)  # type: ignore[arg-type]
    if slot.end <= slot.start:
        return None
    return slot


def free_slots(
    events: Iterable[Event],
    window: Optional[DayWindow],
    target_date: dt.date,
) -> List[TimeSlot]:
    """Open intervals of `window` on `target_date` not covered by `events`.

    `events` are the items already known to occur on the date. Notes are
    ignored. Any blocking event without a time range is taken to fill the
    whole day, so the result is empty: untimed items are never given a guessed
    duration. `window=None` means the default 08:00-20:00 day.
    """
    window = window or DayWindow()
    blocking = [e for e in events if e.blocks_time]

    if any(not e.has_time_range for e in blocking):
        return []

    if isinstance(target_date, dt.datetime):
        target_date = target_date.date()

    busy = [s for s in (_busy_slot(e, target_date) for e in blocking) if s is not None]
    return _subtract(window.on_date(target_date), merge_slots(busy))


def total_free(slots: Iterable[TimeSlot]) -> dt.timedelta:
    total = _ZERO
    for s in slots:
        total += s.duration
    return total


def scheduled_hours(events: Iterable[Event]) -> float:
    """Rough booked hours for a day card.

    Untimed events count as 1 h. Timed events count their length clamped to
    30-180 minutes. Notes count for nothing.
    """
    total_min = 0
    for e in events:
        if not e.blocks_time:
            continue
        if not e.has_time_range:
            total_min += 60
            continue
        start = e.start_time.hour * 60 + e.start_time.minute  # type: ignore[union-attr]
        end = e.end_time.hour * 60 + e.end_time.minute  # type: ignore[union-attr]
        total_min += min(180, max(30, end - start))
    return total_min / 60


def free_slots_by_day(
    events: Sequence[Event],
    days: Iterable[dt.date],
    window: Optional[DayWindow] = None,
) -> List[Tuple[dt.date, List[TimeSlot]]]:
    """Per-day free time for a run of dates (the weekly overview)."""
    window = window or DayWindow()
    out: List[Tuple[dt.date, List[TimeSlot]]] = []
    for d in days:
        out.append((d, free_slots(events_for_date(events, d), window, d)))
    return out


def week_of(day: dt.date, *, days: int = 7) -> List[dt.date]:
    return [day + dt.timedelta(days=i) for i in range(max(1, int(days)))]
