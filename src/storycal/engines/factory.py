"""
storycal.engines.factory
------------------------
Transforms pure data calendar descriptions into live, executable engines.
"""

from __future__ import annotations
from typing import Sequence

from storycal.core.types import Calendar
from storycal.engines.arithmetic import ArithmeticOffsetEngine
from storycal.engines.calendar import CalendarEngine
from storycal.engines.epoch import DEFAULT_EPOCH_STRATEGIES, EpochStrategy
from storycal.engines.lookup import LookupOffsetEngine


def build_offset_engine(calendar: Calendar):
    """Lookup-table calendars are never computed arithmetically."""
    if calendar.uses_lookup_table:
        return LookupOffsetEngine(calendar)
    return ArithmeticOffsetEngine(calendar)


def make_engine(
    calendar: Calendar,
    *,
    epoch_strategies: Sequence[EpochStrategy] = DEFAULT_EPOCH_STRATEGIES,
) -> CalendarEngine:
    """The universal entry point."""
    if not isinstance(calendar, Calendar):
        raise TypeError(f"Expected a Calendar, got {type(calendar).__name__}")
    return CalendarEngine(calendar, build_offset_engine(calendar), epoch_strategies)
