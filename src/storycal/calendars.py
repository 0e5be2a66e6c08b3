from __future__ import annotations

from typing import Dict

from .core.types import Calendar, CalendarDate, CalendarMonth, LeapYearRule

# ============================================================
# GREGORIAN
# ============================================================

GREGORIAN_MONTHS = (
    CalendarMonth("January", 31),
    CalendarMonth("February", 28),
    CalendarMonth("March", 31),
    CalendarMonth("April", 30),
    CalendarMonth("May", 31),
    CalendarMonth("June", 30),
    CalendarMonth("July", 31),
    CalendarMonth("August", 31),
    CalendarMonth("September", 30),
    CalendarMonth("October", 31),
    CalendarMonth("November", 30),
    CalendarMonth("December", 31),
)

GREGORIAN_LEAP_RULE = LeapYearRule(
    kind="divisible",
    divisor=4,
    exception_divisor=100,
    exception_exception_divisor=400,
    days_added=1,
    description="Gregorian 4/100/400",
)

# Offset 0 is 1970-01-01. The leap day is added to the year total, not to
# February, so dates after February 28th in leap years drift by one day.
GREGORIAN = Calendar(
    id="gregorian",
    name="Gregorian",
    days_per_year=365,
    months=GREGORIAN_MONTHS,
    reference_date=CalendarDate(1970, 1, 1),
    epoch_gregorian_date="1970-01-01",
    leap_year_rules=(GREGORIAN_LEAP_RULE,),
)

ALL_CALENDARS: Dict[str, Calendar] = {
    "gregorian": GREGORIAN,
}
