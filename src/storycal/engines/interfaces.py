"""
storycal.engines.interfaces
---------------------------
Boundaries between the day-offset layer (calendar date <-> absolute day
offset) and the orchestrator that adds time of day and the real-world epoch.

Standard reference frame:
An absolute day offset is a signed count of days from the calendar's own
reference date. Offset 0 is the reference year's first day.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..core.diagnostics import Diagnostics
from ..core.types import AbsoluteDate, Calendar, CalendarDate


class OffsetEngineProtocol(Protocol):
    """Maps calendar dates to absolute day offsets and back."""

    calendar: Calendar

    def to_offset(self, date: CalendarDate, diag: Optional[Diagnostics] = None) -> int:
        """Absolute day offset of date (day-level; time is ignored)."""
        ...

    def from_offset(self, offset: int, time_of_day: int = 0, diag: Optional[Diagnostics] = None) -> CalendarDate:
        """
        Calendar date covering the given offset.
        A positive time_of_day (ms) is rendered into the returned date's time.
        """
        ...


class CalendarEngineProtocol(Protocol):
    """
    The orchestrator. Binds an offset engine to the calendar's epoch anchor,
    translating dates to continuous Unix-millisecond timestamps and back.
    """
    calendar: Calendar
    offsets: OffsetEngineProtocol

    def to_absolute(self, date: CalendarDate, diag: Optional[Diagnostics] = None) -> AbsoluteDate:
        ...

    def from_absolute(self, absolute: AbsoluteDate, diag: Optional[Diagnostics] = None) -> CalendarDate:
        ...

    def to_timestamp(self, absolute: AbsoluteDate, diag: Optional[Diagnostics] = None) -> int:
        ...

    def from_timestamp(self, ms, diag: Optional[Diagnostics] = None) -> CalendarDate:
        ...
