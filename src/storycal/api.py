from __future__ import annotations

from datetime import date as _date
import logging
from typing import List, Optional, Sequence

from .core.diagnostics import Diagnostics, ensure
from .core.registry import CalendarRegistry
from .core.time import timestamp_to_date
from .core.types import AbsoluteDate, Calendar, CalendarDate, ConversionResult, IndexedMonth, Precision
from .engines import leap as _leap
from .engines.arithmetic import days_in_month as _days_in_month
from .engines.epoch import DEFAULT_EPOCH_STRATEGIES, EpochAnchor, EpochStrategy
from .engines.factory import make_engine

logger = logging.getLogger(__name__)

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def list_calendars() -> List[str]:
    return _reg().list()

def get_calendar(name: str) -> Calendar:
    return _reg().get(name)

def register_calendar(name: str, calendar: Calendar, *, overwrite: bool = False) -> None:
    _reg().register(name, calendar, overwrite=overwrite)

def open_calendar(ref: str) -> Calendar:
    """A registered calendar name, or a path to a YAML / Markdown calendar file."""
    if ref in _reg():
        return _reg().get(ref)
    from .config import load_calendar
    return load_calendar(ref)

# ============================================================
# Conversion
# ============================================================

def _precision(d: CalendarDate) -> Precision:
    if d.time:
        return "time"
    if not d.day:
        return "month" if d.month != IndexedMonth(0) else "year"
    return "day"

def convert(date: CalendarDate, source: Calendar, target: Calendar, *, diag: Optional[Diagnostics] = None) -> ConversionResult:
    """
    Convert date from source to target through the shared absolute day offset.

    The timestamp is anchored on the source calendar's epoch. The result's
    warnings are only those raised by this conversion; they are also merged
    into diag when one is given.
    """
    local = Diagnostics()
    src = make_engine(source)
    absolute = src.to_absolute(date, local)
    target_date = make_engine(target).from_absolute(absolute, local)
    timestamp = src.to_timestamp(absolute, local)
    if diag is not None:
        diag.merge(local)
    return ConversionResult(
        source_date=date,
        target_date=target_date,
        timestamp=timestamp,
        precision=_precision(date),
        warnings=tuple(r.message for r in local.warnings),
    )

def to_absolute_offset(date: CalendarDate, calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> int:
    return make_engine(calendar).offsets.to_offset(date, diag)

def from_absolute_offset(
    offset: int,
    calendar: Calendar,
    time_of_day: int = 0,
    *,
    diag: Optional[Diagnostics] = None,
) -> CalendarDate:
    return make_engine(calendar).offsets.from_offset(offset, time_of_day, diag)

def to_absolute_date(date: CalendarDate, calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> AbsoluteDate:
    return make_engine(calendar).to_absolute(date, diag)

# ============================================================
# Timestamps
# ============================================================

def resolve_epoch(
    calendar: Calendar,
    *,
    strategies: Sequence[EpochStrategy] = DEFAULT_EPOCH_STRATEGIES,
    diag: Optional[Diagnostics] = None,
) -> EpochAnchor:
    return make_engine(calendar, epoch_strategies=strategies).epoch(diag)

def get_epoch_timestamp(calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> int:
    return resolve_epoch(calendar, diag=diag).timestamp

def to_timestamp(absolute: AbsoluteDate, *, diag: Optional[Diagnostics] = None) -> int:
    return make_engine(absolute.calendar).to_timestamp(absolute, diag)

def date_to_timestamp(date: CalendarDate, calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> int:
    eng = make_engine(calendar)
    return eng.to_timestamp(eng.to_absolute(date, diag), diag)

def from_timestamp(ms, calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> CalendarDate:
    return make_engine(calendar).from_timestamp(ms, diag)

def convert_to_gregorian(date: CalendarDate, calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> Optional[_date]:
    """Proleptic Gregorian civil date (UTC) of the instant date denotes, or None outside datetime range."""
    ms = date_to_timestamp(date, calendar, diag=diag)
    try:
        return timestamp_to_date(ms)
    except ValueError:
        ensure(diag).error("gregorian.out_of_range", f"{date} falls outside the supported Gregorian range", log=logger)
        return None

# ============================================================
# Calendar arithmetic helpers
# ============================================================

def is_leap_year(year: int, calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> bool:
    return _leap.is_leap_year(year, calendar, diag)

def days_in_year(year: int, calendar: Calendar, *, diag: Optional[Diagnostics] = None) -> int:
    return _leap.days_in_year(year, calendar, diag)

def days_in_month(month: int, calendar: Calendar) -> int:
    return _days_in_month(month, calendar)
