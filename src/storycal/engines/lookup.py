"""
storycal.engines.lookup
-----------------------
Table-driven offset engine for calendars whose day mapping cannot be computed
arithmetically. The table is authoritative; misses snap to the nearest entry
rather than interpolating a synthetic date.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.diagnostics import Diagnostics, ensure
from ..core.time import format_time_of_day
from ..core.types import SENTINEL_DATE, Calendar, CalendarDate, IndexedMonth, LookupEntry

logger = logging.getLogger(__name__)


def _distance(entry: LookupEntry, date: CalendarDate) -> int:
    year_diff = abs(entry.year - (date.year or 0)) * 365
    if isinstance(entry.month, IndexedMonth) and isinstance(date.month, IndexedMonth):
        month_diff = abs(entry.month.index - date.month.index) * 30
    else:
        month_diff = 0
    return year_diff + month_diff + abs(entry.day - date.day)


def resolve_offset(date: CalendarDate, table: Sequence[LookupEntry], diag: Optional[Diagnostics] = None) -> int:
    for e in table:
        if e.year == date.year and e.month == date.month and e.day == date.day:
            return e.absolute_day_offset

    if not table:
        ensure(diag).warning("lookup.no_entry", f"No lookup entry found for date {date}", log=logger)
        return 0

    closest = min(table, key=lambda e: _distance(e, date))
    ensure(diag).info(
        "lookup.snapped",
        f"No exact lookup entry for {date}; using nearest entry {closest.date}",
        log=logger,
    )
    return closest.absolute_day_offset


def resolve_date(
    offset: int,
    table: Sequence[LookupEntry],
    time_of_day: int = 0,
    calendar: Optional[Calendar] = None,
    diag: Optional[Diagnostics] = None,
) -> CalendarDate:
    time = format_time_of_day(time_of_day, calendar) if (time_of_day > 0 and calendar is not None) else None

    for e in table:
        if e.absolute_day_offset == offset:
            return e.date.with_time(time)

    below = [e for e in table if e.absolute_day_offset < offset]
    above = [e for e in table if e.absolute_day_offset > offset]
    if below and above:
        before = max(below, key=lambda e: e.absolute_day_offset)
        after = min(above, key=lambda e: e.absolute_day_offset)
        ratio = (offset - before.absolute_day_offset) / (after.absolute_day_offset - before.absolute_day_offset)
        closest = before if ratio < 0.5 else after
        ensure(diag).info(
            "lookup.snapped",
            f"No exact lookup entry for offset {offset}; using nearest entry {closest.date}",
            log=logger,
        )
        return closest.date.with_time(time)

    ensure(diag).warning("lookup.no_entry", f"No lookup entry found for offset {offset}", log=logger)
    return SENTINEL_DATE


class LookupOffsetEngine:
    """Implements OffsetEngineProtocol over calendar.lookup_table."""

    def __init__(self, calendar: Calendar):
        self.calendar = calendar
        self.table = calendar.lookup_table or ()

    def to_offset(self, date: CalendarDate, diag: Optional[Diagnostics] = None) -> int:
        return resolve_offset(date, self.table, diag)

    def from_offset(self, offset: int, time_of_day: int = 0, diag: Optional[Diagnostics] = None) -> CalendarDate:
        return resolve_date(offset, self.table, time_of_day, self.calendar, diag)
