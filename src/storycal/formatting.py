from __future__ import annotations

import math
from typing import List, Literal, Optional

from .core.types import Calendar, CalendarDate, IndexedMonth, IntercalaryDay, MonthLike, NamedMonth, month_ref
from .engines.arithmetic import SYNTHETIC_MONTH_DAYS

Style = Literal["short", "long", "full"]


def get_month_name(month: MonthLike, calendar: Calendar) -> str:
    ref = month_ref(month)
    if isinstance(ref, NamedMonth):
        return ref.name
    if 1 <= ref.index <= len(calendar.months):
        return calendar.months[ref.index - 1].name
    return f"Month {ref.index}"


def format_date(date: CalendarDate, calendar: Calendar, style: Style = "long") -> str:
    """
    "day month year", e.g. "5 Frostmoon 1203".

    Day and month are omitted when unset (0); the time is appended only for
    style="full". No locale handling.
    """
    parts: List[str] = []
    if date.day > 0:
        parts.append(str(date.day))
    if date.month != IndexedMonth(0):
        parts.append(get_month_name(date.month, calendar))
    parts.append(str(date.year))
    if style == "full" and date.time:
        parts.append(date.time)
    return " ".join(parts)


def _synthetic_month_count(calendar: Calendar) -> int:
    return math.ceil((calendar.days_per_year or 365) / SYNTHETIC_MONTH_DAYS)


def get_month_names(calendar: Calendar) -> List[str]:
    if calendar.months:
        return [m.name for m in calendar.months]
    return [f"Month {i + 1}" for i in range(_synthetic_month_count(calendar))]


def get_days_per_month(calendar: Calendar) -> List[int]:
    if calendar.months:
        return [m.days for m in calendar.months]
    return [SYNTHETIC_MONTH_DAYS] * _synthetic_month_count(calendar)


def day_of_year(date: CalendarDate, calendar: Calendar) -> int:
    """1-based position of date within its year, counting month days only."""
    idx = calendar.month_index(date.month) if date.month != IndexedMonth(0) else None
    before = sum(m.days for m in calendar.months[: idx - 1]) if idx else 0
    return before + date.day


def is_intercalary_day(date: CalendarDate, calendar: Calendar) -> Optional[IntercalaryDay]:
    if not calendar.intercalary_days:
        return None
    doy = day_of_year(date, calendar)
    for iday in calendar.intercalary_days:
        if iday.day_of_year == doy:
            return iday
    return None
