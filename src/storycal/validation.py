"""
Structural checks for calendars and dates.

Nothing here raises: the authoring layer surfaces the returned warnings to
the user and decides whether to accept the definition.
"""

from __future__ import annotations

from typing import List

from .core.time import parse_iso_timestamp
from .core.types import Calendar, CalendarDate, IndexedMonth
from .engines.arithmetic import days_in_month

CRITICAL_PREFIX = "CRITICAL:"


def validate_calendar(calendar: Calendar) -> List[str]:
    warnings: List[str] = []

    if not calendar.name:
        warnings.append("Calendar is missing a name")

    if not calendar.days_per_year or calendar.days_per_year <= 0:
        warnings.append("Calendar is missing or has invalid daysPerYear")

    if not calendar.months:
        warnings.append("Calendar is missing months definition")
    else:
        total = sum(m.days for m in calendar.months)
        if calendar.days_per_year and total != calendar.days_per_year:
            warnings.append(f"Calendar months total {total} days but daysPerYear is {calendar.days_per_year}")

    ref = calendar.reference_date
    if ref is None:
        warnings.append("Calendar is missing referenceDate - timeline display may be incorrect")
    else:
        if ref.year is None:
            warnings.append("Calendar referenceDate is missing year")
        if ref.month == IndexedMonth(0):
            warnings.append("Calendar referenceDate is missing month")
        if not ref.day:
            warnings.append("Calendar referenceDate is missing day")

    if not calendar.epoch_gregorian_date:
        warnings.append(
            f"{CRITICAL_PREFIX} Calendar is missing epochGregorianDate. Timeline positioning will be INCORRECT. "
            "Add epochGregorianDate (e.g., \"1492-01-01\") to specify what Gregorian date corresponds "
            "to your calendar's epoch."
        )
    elif parse_iso_timestamp(calendar.epoch_gregorian_date) is None:
        warnings.append(
            f"{CRITICAL_PREFIX} Calendar has invalid epochGregorianDate: \"{calendar.epoch_gregorian_date}\". "
            "Must be a valid ISO date string (e.g., \"1492-01-01\")."
        )

    return warnings


def validate_custom_date(date: CalendarDate, calendar: Calendar) -> bool:
    """Year present, month resolvable, and day within that month's length."""
    if date.year is None:
        return False

    if isinstance(date.month, IndexedMonth):
        if date.month.index < 1:
            return False
        if calendar.months and not (1 <= date.month.index <= len(calendar.months)):
            return False
        month_no = date.month.index
    else:
        idx = calendar.month_index(date.month)
        if calendar.months and idx is None:
            return False
        month_no = idx or 1

    if date.day < 1:
        return False
    return date.day <= days_in_month(month_no, calendar)
