# dayplan/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RepeatFrequency(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def label(self) -> str:
        return _REPEAT_LABELS[self]

    @classmethod
    def from_name(cls, name: object) -> "RepeatFrequency":
        """Unknown or missing names mean "does not repeat"."""
        if isinstance(name, cls):
            return name
        s = str(name or "").strip().lower()
        for f in cls:
            if f.value == s:
                return f
        return cls.NONE


_REPEAT_LABELS = {
    RepeatFrequency.NONE: "Does not repeat",
    RepeatFrequency.DAILY: "Daily",
    RepeatFrequency.WEEKLY: "Weekly",
    RepeatFrequency.MONTHLY: "Monthly",
}


class EventKind(str, Enum):
    EVENT = "event"
    TASK = "task"
    NOTE = "note"
    TIME_OFF = "time_off"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @classmethod
    def from_name(cls, name: object) -> "EventKind":
        if isinstance(name, cls):
            return name
        s = str(name or "").strip().lower()
        # Stored records use "timeOff"; accept both spellings.
        if s in {"timeoff", "time-off"}:
            return cls.TIME_OFF
        for k in cls:
            if k.value == s:
                return k
        return cls.EVENT


_KIND_LABELS = {
    EventKind.EVENT: "Event",
    EventKind.TASK: "Task",
    EventKind.NOTE: "Note",
    EventKind.TIME_OFF: "Time Off",
}


def blocks_time(kind: EventKind) -> bool:
    """Notes never occupy time; every other kind does."""
    return kind is not EventKind.NOTE


@dataclass(frozen=True)
class Event:
    date: dt.date
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    repeat: RepeatFrequency = RepeatFrequency.NONE
    kind: EventKind = EventKind.EVENT

    id: str = ""
    title: str = ""
    description: str = ""
    category: str = "General"
    is_completed: bool = False

    @property
    def has_time_range(self) -> bool:
        return self.start_time is not None and self.end_time is not None

    @property
    def blocks_time(self) -> bool:
        return blocks_time(self.kind)


@dataclass(frozen=True)
class TimeSlot:
    start: dt.datetime
    end: dt.datetime

    @property
    def duration(self) -> dt.timedelta:
        return self.end - self.start

    @classmethod
    def on_date(cls, day: dt.date, start: dt.time, end: dt.time) -> "TimeSlot":
        return cls(start=dt.datetime.combine(day, start), end=dt.datetime.combine(day, end))


@dataclass(frozen=True)
class DayWindow:
    start: dt.time = dt.time(8, 0)
    end: dt.time = dt.time(20, 0)

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError(f"day window end must be after start ({self.start} - {self.end})")

    def on_date(self, day: dt.date) -> TimeSlot:
        return TimeSlot.on_date(day, self.start, self.end)


__all__ = [
    "RepeatFrequency",
    "EventKind",
    "blocks_time",
    "Event",
    "TimeSlot",
    "DayWindow",
]
