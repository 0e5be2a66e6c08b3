"""
storycal.config
---------------
Calendar definitions as plain records (YAML documents, Markdown front matter,
or already-parsed dicts) <-> Calendar objects.

Records use the authoring layer's camelCase keys (daysPerYear,
leapYearRules, ...); snake_case keys are accepted too. Missing or partial
fields are kept as-is and reported by validate_calendar(), never rejected
here. Only a document that is not a mapping at all raises.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .core.errors import CalendarConfigError
from .core.types import (
    Calendar,
    CalendarDate,
    CalendarMonth,
    IntercalaryDay,
    LeapYearRule,
    LookupEntry,
    MonthRef,
    NamedMonth,
)

logger = logging.getLogger(__name__)

_FRONT_MATTER = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.S)
_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _normalize(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_snake(str(k)): v for k, v in data.items()}


def _opt_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer calendar value %r", value)
        return None


def _month_value(value: Any) -> Union[str, int]:
    # YAML gives ints for 3 but strings for Frostmoon; keep names as names.
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return str(value)


def _epoch_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    # YAML turns an unquoted 1492-01-01 into a datetime.date
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _date(data: Any) -> Optional[CalendarDate]:
    if not isinstance(data, Mapping):
        return None
    d = _normalize(data)
    return CalendarDate(
        year=_opt_int(d.get("year")),
        month=_month_value(d.get("month")),
        day=_opt_int(d.get("day")) or 0,
        time=None if d.get("time") is None else str(d.get("time")),
    )


def _month(data: Mapping[str, Any]) -> CalendarMonth:
    d = _normalize(data)
    return CalendarMonth(name=str(d.get("name", "")), days=_opt_int(d.get("days")) or 0)


def _rule(data: Mapping[str, Any]) -> LeapYearRule:
    d = _normalize(data)
    days_added = _opt_int(d.get("days_added"))
    return LeapYearRule(
        kind=d.get("type", d.get("kind", "divisible")),
        divisor=_opt_int(d.get("divisor")),
        exception_divisor=_opt_int(d.get("exception_divisor")),
        exception_exception_divisor=_opt_int(d.get("exception_exception_divisor")),
        days_added=1 if days_added is None else days_added,
        description=d.get("description"),
    )


def entry_from_dict(data: Mapping[str, Any]) -> LookupEntry:
    d = _normalize(data)
    return LookupEntry(
        year=_opt_int(d.get("year")) or 0,
        month=_month_value(d.get("month")),
        day=_opt_int(d.get("day")) or 0,
        absolute_day_offset=_opt_int(d.get("absolute_day_offset")) or 0,
        is_intercalary=bool(d.get("is_intercalary", False)),
    )


def _intercalary(data: Mapping[str, Any]) -> IntercalaryDay:
    d = _normalize(data)
    return IntercalaryDay(
        name=str(d.get("name", "")),
        day_of_year=_opt_int(d.get("day_of_year")) or 0,
        description=d.get("description"),
        counted=d.get("counted") is not False,
    )


def _records(value: Any, build) -> tuple:
    if not value:
        return ()
    return tuple(build(v) for v in value if isinstance(v, Mapping))


def calendar_from_dict(data: Mapping[str, Any]) -> Calendar:
    if not isinstance(data, Mapping):
        raise CalendarConfigError(f"Calendar definition must be a mapping, got {type(data).__name__}")
    d = _normalize(data)

    table = d.get("lookup_table")
    return Calendar(
        id=d.get("id"),
        name=str(d.get("name") or ""),
        days_per_year=_opt_int(d.get("days_per_year")),
        months=_records(d.get("months"), _month),
        reference_date=_date(d.get("reference_date")),
        epoch_gregorian_date=_epoch_text(d.get("epoch_gregorian_date")),
        leap_year_rules=_records(d.get("leap_year_rules"), _rule),
        is_lookup_table=bool(d.get("is_lookup_table", False)),
        lookup_table=None if table is None else _records(table, entry_from_dict),
        intercalary_days=_records(d.get("intercalary_days"), _intercalary),
        hours_per_day=_opt_int(d.get("hours_per_day")),
        minutes_per_hour=_opt_int(d.get("minutes_per_hour")),
        seconds_per_minute=_opt_int(d.get("seconds_per_minute")),
    )


# ============================================================
# Calendar -> record
# ============================================================

def _month_out(month: MonthRef) -> Union[str, int]:
    return month.name if isinstance(month, NamedMonth) else month.index


def _date_out(date: CalendarDate) -> Dict[str, Any]:
    out: Dict[str, Any] = {"year": date.year, "month": _month_out(date.month), "day": date.day}
    if date.time:
        out["time"] = date.time
    return out


def _prune(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def entry_to_dict(entry: LookupEntry) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "year": entry.year,
        "month": _month_out(entry.month),
        "day": entry.day,
        "absoluteDayOffset": entry.absolute_day_offset,
    }
    if entry.is_intercalary:
        out["isIntercalary"] = True
    return out


def calendar_to_dict(calendar: Calendar) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": calendar.id,
        "name": calendar.name,
        "daysPerYear": calendar.days_per_year,
        "months": [{"name": m.name, "days": m.days} for m in calendar.months],
        "referenceDate": _date_out(calendar.reference_date) if calendar.reference_date else None,
        "epochGregorianDate": calendar.epoch_gregorian_date,
        "leapYearRules": [
            _prune({
                "type": r.kind,
                "divisor": r.divisor,
                "exceptionDivisor": r.exception_divisor,
                "exceptionExceptionDivisor": r.exception_exception_divisor,
                "daysAdded": r.days_added,
                "description": r.description,
            })
            for r in calendar.leap_year_rules
        ],
        "intercalaryDays": [
            _prune({
                "name": i.name,
                "dayOfYear": i.day_of_year,
                "description": i.description,
                "counted": None if i.counted else False,
            })
            for i in calendar.intercalary_days
        ],
        "hoursPerDay": calendar.hours_per_day,
        "minutesPerHour": calendar.minutes_per_hour,
        "secondsPerMinute": calendar.seconds_per_minute,
    }
    if calendar.is_lookup_table:
        out["isLookupTable"] = True
    if calendar.lookup_table is not None:
        out["lookupTable"] = [entry_to_dict(e) for e in calendar.lookup_table]
    return _prune(out)


# ============================================================
# YAML / Markdown
# ============================================================

def loads_calendar(text: str) -> Calendar:
    """Parse a YAML calendar document, or a Markdown note with YAML front matter."""
    mt = _FRONT_MATTER.match(text)
    body = mt.group(1) if mt else text
    try:
        data = yaml.safe_load(body)
    except yaml.YAMLError as e:
        raise CalendarConfigError(f"Invalid YAML calendar definition: {e}") from e
    return calendar_from_dict(data)


def load_calendar(path: Union[str, Path]) -> Calendar:
    path = Path(path)
    logger.debug("Loading calendar from %s", path)
    return loads_calendar(path.read_text(encoding="utf-8"))


def dumps_calendar(calendar: Calendar) -> str:
    return yaml.safe_dump(calendar_to_dict(calendar), default_flow_style=False, sort_keys=False, allow_unicode=True)
