"""
storycal.tables
---------------
Generate, check and combine lookup tables for irregular calendars.

A generated table enumerates every month day (and optionally every counted
intercalary day) of each year with consecutive offsets. Leap days are added
to the next year's starting offset but get no entry of their own, so leap
years leave gaps that validate_lookup_table() reports as warnings.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .config import entry_from_dict, entry_to_dict
from .core.types import Calendar, IndexedMonth, IntercalaryDay, LookupEntry, NamedMonth
from .engines.leap import leap_days

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableReport:
    valid: bool
    errors: Tuple[str, ...] = field(default=())
    warnings: Tuple[str, ...] = field(default=())


def _intercalary_after(iday: IntercalaryDay, month_no: int, calendar: Calendar) -> bool:
    """True when iday's day_of_year falls in the day span of the month after month_no."""
    days_so_far = sum(m.days for m in calendar.months[:month_no])
    if month_no < len(calendar.months):
        next_end = days_so_far + calendar.months[month_no].days
    else:
        next_end = days_so_far
    return days_so_far < iday.day_of_year <= next_end


def _year_entries(year: int, calendar: Calendar, start: int, include_intercalary: bool) -> List[LookupEntry]:
    entries: List[LookupEntry] = []
    offset = start

    if not calendar.months:
        for day in range(1, (calendar.days_per_year or 365) + 1):
            entries.append(LookupEntry(year, IndexedMonth(1), day, offset))
            offset += 1
        return entries

    for i, month in enumerate(calendar.months):
        for day in range(1, month.days + 1):
            entries.append(LookupEntry(year, NamedMonth(month.name), day, offset))
            offset += 1
        if include_intercalary:
            for iday in calendar.intercalary_days:
                if iday.counted and _intercalary_after(iday, i + 1, calendar):
                    entries.append(LookupEntry(year, NamedMonth(iday.name), 1, offset, is_intercalary=True))
                    offset += 1
    return entries


def _year_span(year: int, calendar: Calendar, include_intercalary: bool) -> int:
    return len(_year_entries(year, calendar, 0, include_intercalary)) + leap_days(year, calendar)


def build_lookup_table(
    calendar: Calendar,
    start_year: int,
    end_year: int,
    *,
    include_intercalary: bool = False,
    reference_day_offset: int = 0,
    align_to_reference: bool = False,
) -> List[LookupEntry]:
    """
    Entries for every year in [start_year, end_year].

    With align_to_reference the first entry's offset is shifted by the days
    between the calendar's reference year and start_year, so offset
    reference_day_offset lands on the reference year's first day.
    """
    offset = reference_day_offset
    if align_to_reference and calendar.reference_date is not None:
        ref_year = calendar.epoch_year
        if start_year < ref_year:
            offset -= sum(_year_span(y, calendar, include_intercalary) for y in range(start_year, ref_year))
        else:
            offset += sum(_year_span(y, calendar, include_intercalary) for y in range(ref_year, start_year))

    entries: List[LookupEntry] = []
    for year in range(start_year, end_year + 1):
        year_entries = _year_entries(year, calendar, offset, include_intercalary)
        entries.extend(year_entries)
        offset += len(year_entries) + leap_days(year, calendar)
    return entries


def sample_table(calendar: Calendar, years: int = 10) -> List[LookupEntry]:
    start = calendar.epoch_year if calendar.reference_date is not None else 1
    return build_lookup_table(calendar, start, start + years - 1, include_intercalary=True)


def simple_table(days_per_year: int, start_year: int, end_year: int) -> List[LookupEntry]:
    """Month-less table: days 1..days_per_year of month 1, offset 0 at start_year."""
    entries: List[LookupEntry] = []
    offset = 0
    for year in range(start_year, end_year + 1):
        for day in range(1, days_per_year + 1):
            entries.append(LookupEntry(year, IndexedMonth(1), day, offset))
            offset += 1
    return entries


def _key(e: LookupEntry) -> str:
    return f"{e.year}-{e.month}-{e.day}"


def validate_lookup_table(entries: Sequence[LookupEntry]) -> TableReport:
    errors: List[str] = []
    warnings: List[str] = []

    if not entries:
        return TableReport(False, ("Lookup table is empty",), ())

    for prev, curr in zip(entries, entries[1:]):
        gap = curr.absolute_day_offset - prev.absolute_day_offset
        if gap > 1:
            warnings.append(f"Gap of {gap - 1} days between {_key(prev)} and {_key(curr)}")
        elif gap < 1:
            errors.append(f"Negative or zero gap between {_key(prev)} and {_key(curr)}")

    seen_dates = set()
    seen_offsets = set()
    for e in entries:
        k = _key(e)
        if k in seen_dates:
            errors.append(f"Duplicate date: {k}")
        seen_dates.add(k)
        if e.absolute_day_offset in seen_offsets:
            errors.append(f"Duplicate offset: {e.absolute_day_offset}")
        seen_offsets.add(e.absolute_day_offset)

    return TableReport(not errors, tuple(errors), tuple(warnings))


def merge_lookup_tables(*tables: Sequence[LookupEntry]) -> List[LookupEntry]:
    """Union of tables; the first occurrence of a date wins. Sorted by offset."""
    merged: List[LookupEntry] = []
    seen = set()
    for table in tables:
        for e in table:
            k = (e.year, e.month, e.day)
            if k not in seen:
                merged.append(e)
                seen.add(k)
    return sorted(merged, key=lambda e: e.absolute_day_offset)


# ============================================================
# JSON
# ============================================================

def export_json(entries: Sequence[LookupEntry]) -> str:
    return json.dumps([entry_to_dict(e) for e in entries], indent=2)


def import_json(text: str) -> List[LookupEntry]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse lookup table JSON: %s", e)
        return []
    if not isinstance(data, list):
        logger.error("Lookup table JSON must be a list, got %s", type(data).__name__)
        return []
    return [entry_from_dict(rec) for rec in data if isinstance(rec, dict)]
