# dayplan/date_query.py
"""Loose date queries for search boxes.

Turns short, possibly partial date text ("2025-09", "9/29", "sep 2", "tod")
into a DateQuery whose unset fields are wildcards. Anything that does not
cleanly fit one of the recognised shapes yields None, and the caller falls
back to plain keyword search.

Prefix matching (relative keywords and month names) accepts a prefix only when
it selects exactly one candidate: "t" is neither today nor tomorrow, "ma" is
neither March nor May.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import List, Optional

_RELATIVE_DAYS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}

_MONTH_NAMES = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

_YMD_RE = re.compile(r"^(\d{4})(?:[-/.](\d{1,2})(?:[-/.](\d{1,2}))?)?$")
_MD_RE = re.compile(r"^(\d{1,2})[-/.](\d{1,2})$")
_TOKEN_SPLIT_RE = re.compile(r"[\s,.\-]+")
_DAY_RE = re.compile(r"^\d{1,2}$")
_YEAR_RE = re.compile(r"^\d{4}$")


@dataclass(frozen=True)
class DateQuery:
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    def matches(self, date: dt.date) -> bool:
        if self.year is not None and date.year != self.year:
            return False
        if self.month is not None and date.month != self.month:
            return False
        if self.day is not None and date.day != self.day:
            return False
        return True

    @classmethod
    def for_date(cls, d: dt.date) -> "DateQuery":
        return cls(year=d.year, month=d.month, day=d.day)


def safe_date(year: int, month: int, day: int) -> Optional[dt.date]:
    """The date (year, month, day) if it exists on the calendar, else None."""
    if not (1 <= month <= 12):
        return None
    try:
        d = dt.date(year, month, day)
    except ValueError:
        return None
    if (d.year, d.month, d.day) != (year, month, day):
        return None
    return d


def _today(now: dt.date) -> dt.date:
    if isinstance(now, dt.datetime):
        return now.date()
    return now


def _unique_prefix_hit(prefix: str, table: dict) -> Optional[int]:
    if not prefix:
        return None
    hits = {v for k, v in table.items() if k.startswith(prefix)}
    if len(hits) != 1:
        return None
    return next(iter(hits))


def month_from_prefix(token: str) -> Optional[int]:
    """Month number for a name or prefix that selects exactly one month."""
    return _unique_prefix_hit(token.strip().lower(), _MONTH_NAMES)


def _parse_relative(q: str, today: dt.date) -> Optional[DateQuery]:
    delta = _unique_prefix_hit(q, _RELATIVE_DAYS)
    if delta is None:
        return None
    try:
        target = today + dt.timedelta(days=delta)
    except OverflowError:
        return None
    return DateQuery.for_date(target)


def _parse_month_tokens(tokens: List[str], today: dt.date) -> Optional[DateQuery]:
    year_now = today.year

    if len(tokens) == 1:
        m = month_from_prefix(tokens[0])
        if m is not None:
            return DateQuery(year=year_now, month=m)
        return None

    if len(tokens) == 2:
        first, second = tokens
        m_first = month_from_prefix(first)
        m_second = month_from_prefix(second)

        # "sep 2"
        if m_first is not None and _DAY_RE.match(second):
            d = int(second)
            if safe_date(year_now, m_first, d) is not None:
                return DateQuery(year=year_now, month=m_first, day=d)
        # "sep 2025"
        if m_first is not None and _YEAR_RE.match(second):
            return DateQuery(year=int(second), month=m_first)
        # "2 sep"
        if _DAY_RE.match(first) and m_second is not None:
            d = int(first)
            if safe_date(year_now, m_second, d) is not None:
                return DateQuery(year=year_now, month=m_second, day=d)
        return None

    # Three or more tokens: "sep 2 2025", "2 sep 2025", "monday sep 2".
    month: Optional[int] = None
    year: Optional[int] = None
    day: Optional[int] = None
    for t in tokens:
        if month is None:
            month = month_from_prefix(t)
        if year is None and _YEAR_RE.match(t):
            year = int(t)
        if day is None and _DAY_RE.match(t):
            day = int(t)
    if year is None:
        year = year_now
    if month is not None and day is not None and safe_date(year, month, day) is not None:
        return DateQuery(year=year, month=month, day=day)
    return None


def parse_date_query(text: str, now: dt.date) -> Optional[DateQuery]:
    """Interpret `text` as a (possibly partial) date, relative to `now`.

    Rules, first match wins:
      1) today / tomorrow / yesterday, or an unambiguous prefix of one
      2) YYYY, YYYY-MM, YYYY-MM-DD (separators - / . interchangeable)
      3) M-D or D-M without a year (month/day is tried first)
      4) month names or unambiguous prefixes, with an optional day and year
    """
    q = (text or "").strip().lower()
    if not q:
        return None
    today = _today(now)

    hit = _parse_relative(q, today)
    if hit is not None:
        return hit

    m = _YMD_RE.match(q)
    if m:
        y = int(m.group(1))
        if m.group(2) is None:
            return DateQuery(year=y)
        mo = int(m.group(2))
        if not (1 <= mo <= 12):
            return None
        if m.group(3) is None:
            return DateQuery(year=y, month=mo)
        d = int(m.group(3))
        if safe_date(y, mo, d) is None:
            return None
        return DateQuery(year=y, month=mo, day=d)

    m = _MD_RE.match(q)
    if m:
        a = int(m.group(1))
        b = int(m.group(2))
        if safe_date(today.year, a, b) is not None:
            return DateQuery(year=today.year, month=a, day=b)
        if safe_date(today.year, b, a) is not None:
            return DateQuery(year=today.year, month=b, day=a)

    tokens = [t for t in _TOKEN_SPLIT_RE.split(q) if t]
    if tokens:
        return _parse_month_tokens(tokens, today)
    return None


def guess_picker_date(text: str, now: dt.date) -> Optional[dt.date]:
    """Concrete date to open a date picker on for a search query.

    Unset fields default to the current year, January and the 1st.
    """
    dq = parse_date_query(text, now)
    if dq is None:
        return None
    today = _today(now)
    year = dq.year if dq.year is not None else today.year
    month = dq.month if dq.month is not None else 1
    day = dq.day if dq.day is not None else 1
    return safe_date(year, month, day) or safe_date(year, month, 1)
