"""
storycal.engines.calendar
-------------------------
The Orchestrator. Binds a day-offset engine (arithmetic or lookup table) to
the calendar's epoch anchor, handling time of day and the continuous
Unix-millisecond axis.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Optional, Sequence

from ..core.diagnostics import Diagnostics, ensure
from ..core.time import MS_PER_DAY, parse_time_of_day
from ..core.types import SENTINEL_DATE, AbsoluteDate, Calendar, CalendarDate
from .epoch import DEFAULT_EPOCH_STRATEGIES, EpochAnchor, EpochStrategy, resolve_epoch
from .interfaces import OffsetEngineProtocol

logger = logging.getLogger(__name__)

# Widest span from_timestamp accepts either side of the epoch (about 273 000 years).
MAX_DAY_OFFSET = 100_000_000


class CalendarEngine:
    """
    Translates calendar dates to absolute dates and Unix timestamps and back.
    Stateless apart from the (immutable) calendar it was built for.
    """
    def __init__(
        self,
        calendar: Calendar,
        offsets: OffsetEngineProtocol,
        epoch_strategies: Sequence[EpochStrategy] = DEFAULT_EPOCH_STRATEGIES,
    ):
        self.calendar = calendar
        self.offsets = offsets
        self.epoch_strategies = tuple(epoch_strategies)

    # ---------------------------------------------------------
    # Forward: calendar date -> absolute date -> timestamp
    # ---------------------------------------------------------

    def to_absolute(self, date: CalendarDate, diag: Optional[Diagnostics] = None) -> AbsoluteDate:
        diag = ensure(diag)
        offset = self.offsets.to_offset(date, diag)
        time_of_day = parse_time_of_day(date.time, self.calendar) if date.time else 0
        return AbsoluteDate(offset, time_of_day, self.calendar, date)

    def epoch(self, diag: Optional[Diagnostics] = None) -> EpochAnchor:
        return resolve_epoch(self.calendar, self.epoch_strategies, diag)

    def to_timestamp(self, absolute: AbsoluteDate, diag: Optional[Diagnostics] = None) -> int:
        """Unix ms of an absolute date; the epoch comes from the absolute date's own calendar."""
        anchor = resolve_epoch(absolute.calendar, self.epoch_strategies, diag)
        return anchor.timestamp + absolute.day_offset * MS_PER_DAY + absolute.time_of_day

    # ---------------------------------------------------------
    # Inverse: absolute date / timestamp -> calendar date
    # ---------------------------------------------------------

    def from_absolute(self, absolute: AbsoluteDate, diag: Optional[Diagnostics] = None) -> CalendarDate:
        return self.offsets.from_offset(absolute.day_offset, absolute.time_of_day, diag)

    def from_timestamp(self, ms, diag: Optional[Diagnostics] = None) -> CalendarDate:
        diag = ensure(diag)
        if isinstance(ms, bool) or not isinstance(ms, Real) or not math.isfinite(ms):
            diag.error("timestamp.invalid", f"Invalid timestamp: {ms!r}", log=logger)
            return SENTINEL_DATE

        since_epoch = math.floor(ms) - self.epoch(diag).timestamp
        day_offset, time_of_day = divmod(since_epoch, MS_PER_DAY)
        if abs(day_offset) > MAX_DAY_OFFSET:
            diag.error("timestamp.invalid", f"Timestamp {ms!r} is more than {MAX_DAY_OFFSET} days from the epoch", log=logger)
            return SENTINEL_DATE
        return self.offsets.from_offset(day_offset, time_of_day, diag)
