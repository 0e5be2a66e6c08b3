"""
storycal.engines.arithmetic
---------------------------
Closed-form offset engine: counts whole years from the reference year, then
months, then days.

Leap days are added to the year's total only. They are not attributed to any
particular month, so a leap day falls past the last month in the inverse
walk and is clamped onto the last month's last day.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.diagnostics import Diagnostics, ensure
from ..core.time import format_time_of_day
from ..core.types import Calendar, CalendarDate, IndexedMonth, NamedMonth
from .leap import days_in_year

logger = logging.getLogger(__name__)

# Month length assumed for calendars (or month indices) with no month table.
SYNTHETIC_MONTH_DAYS = 30


def days_in_month(month: int, calendar: Calendar) -> int:
    """Length of 1-based month; 30 when the calendar has no such month."""
    if not calendar.months or month < 1 or month > len(calendar.months):
        return SYNTHETIC_MONTH_DAYS
    return calendar.months[month - 1].days


class ArithmeticOffsetEngine:
    """Implements OffsetEngineProtocol with year/month/day arithmetic."""

    def __init__(self, calendar: Calendar):
        self.calendar = calendar
        self.epoch_year = calendar.epoch_year

    # ---------------------------------------------------------
    # Forward: date -> offset
    # ---------------------------------------------------------

    def year_start(self, year: int, diag: Optional[Diagnostics] = None) -> int:
        """Offset of the first day of year (negative before the reference year)."""
        cal = self.calendar
        total = 0
        if year >= self.epoch_year:
            for y in range(self.epoch_year, year):
                total += days_in_year(y, cal, diag)
        else:
            for y in range(year, self.epoch_year):
                total -= days_in_year(y, cal, diag)
        return total

    def days_before_month(self, date: CalendarDate, diag: Optional[Diagnostics] = None) -> int:
        cal = self.calendar
        month = date.month
        if isinstance(month, IndexedMonth):
            return sum(days_in_month(m, cal) for m in range(1, month.index))

        idx = cal.month_index(month)
        if idx is None:
            ensure(diag).warning(
                "convert.unknown_month",
                f"Month {month.name!r} is not defined in calendar {cal.name!r}; counting from the start of the year",
                log=logger,
            )
            return 0
        return sum(m.days for m in cal.months[: idx - 1])

    def to_offset(self, date: CalendarDate, diag: Optional[Diagnostics] = None) -> int:
        diag = ensure(diag)
        year = date.year
        if year is None:
            diag.warning("convert.missing_year", f"Date {date} has no year; using the reference year", log=logger)
            year = self.epoch_year

        total = self.year_start(year, diag)
        total += self.days_before_month(date, diag)
        if date.day > 0:
            total += date.day - 1
        return total

    # ---------------------------------------------------------
    # Inverse: offset -> date
    # ---------------------------------------------------------

    def from_offset(self, offset: int, time_of_day: int = 0, diag: Optional[Diagnostics] = None) -> CalendarDate:
        diag = ensure(diag)
        cal = self.calendar
        if cal.reference_date is None:
            diag.warning(
                "convert.missing_reference_date",
                f"Calendar {cal.name!r} is missing referenceDate, using year 0 as epoch",
                log=logger,
            )

        # 1. Find the year
        remaining = offset
        year = self.epoch_year
        if remaining >= 0:
            while True:
                span = days_in_year(year, cal, diag)
                if remaining < span:
                    break
                remaining -= span
                year += 1
        else:
            while remaining < 0:
                year -= 1
                remaining += days_in_year(year, cal, diag)

        # 2. Find the month
        if cal.months:
            month = None
            for m in cal.months:
                if remaining < m.days:
                    month = NamedMonth(m.name)
                    break
                remaining -= m.days
            if month is None:
                diag.warning(
                    "convert.month_overflow",
                    f"Remaining days ({remaining}) exceed all months in year {year}. Using the last day of the last month.",
                    log=logger,
                )
                last = cal.months[-1]
                month = NamedMonth(last.name)
                remaining = last.days - 1
        else:
            month = IndexedMonth(remaining // SYNTHETIC_MONTH_DAYS + 1)
            remaining = remaining % SYNTHETIC_MONTH_DAYS

        time = format_time_of_day(time_of_day, cal) if time_of_day > 0 else None
        return CalendarDate(year, month, remaining + 1, time)
