"""
Helpers for timeline widgets drawing a custom calendar on a Unix-ms axis.

Only the date math lives here; deciding where markers go is the widget's job.
"""

from __future__ import annotations

from typing import Callable, Literal

from .core.diagnostics import Diagnostics
from .core.time import MS_PER_DAY
from .core.types import Calendar
from .engines.factory import make_engine
from .formatting import format_date, get_month_name

TimeScale = Literal["millisecond", "second", "minute", "hour", "weekday", "day", "week", "month", "year"]


def determine_time_scale(start: float, end: float) -> TimeScale:
    range_days = (end - start) / MS_PER_DAY
    if range_days > 3650:
        return "year"
    if range_days > 180:
        return "month"
    if range_days > 7:
        return "day"
    return "hour"


def axis_label(timestamp, scale: str, calendar: Calendar, diag: Diagnostics | None = None) -> str:
    d = make_engine(calendar).from_timestamp(timestamp, diag)

    if scale in ("millisecond", "second", "minute"):
        return d.time or ""
    if scale == "hour":
        return f"{d.day} {get_month_name(d.month, calendar)} {d.time or ''}".strip()
    if scale in ("day", "weekday"):
        return f"{d.day} {get_month_name(d.month, calendar)}"
    if scale == "week":
        return f"{get_month_name(d.month, calendar)} {d.year}"
    if scale == "month":
        return get_month_name(d.month, calendar)
    if scale == "year":
        return str(d.year)
    return format_date(d, calendar, "short")


def make_axis_formatter(calendar: Calendar) -> Callable[[float, str], str]:
    """
    The (timestamp, scale) -> label callback a timeline widget expects.

    Each tick gets its own throwaway collector; diagnostics still reach the log.
    """

    def fmt(timestamp, scale: str) -> str:
        return axis_label(timestamp, scale, calendar)

    return fmt
