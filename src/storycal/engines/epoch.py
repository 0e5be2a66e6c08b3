"""
storycal.engines.epoch
----------------------
Anchors a calendar's offset 0 to a real-world Unix-millisecond instant.

Resolution walks an ordered list of strategies and takes the first that
yields a value:

  GREGORIAN_DATE   epoch_gregorian_date parsed as proleptic Gregorian (exact)
  REFERENCE_YEAR   (reference_date.year - 1970) * 365.25 days (approximate)
  UNIX_EPOCH       0, i.e. 1970-01-01 (placement will be wrong)

Every calendar day is one Gregorian day (86 400 000 ms) on this axis,
whatever the calendar's own sub-day units are.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Dict, Optional, Sequence

from ..core.diagnostics import Diagnostics, ensure
from ..core.time import MS_PER_DAY, parse_iso_timestamp
from ..core.types import Calendar

logger = logging.getLogger(__name__)

UNIX_EPOCH_YEAR = 1970
JULIAN_YEAR_DAYS = Fraction(1461, 4)


class EpochStrategy(enum.Enum):
    GREGORIAN_DATE = "gregorian_date"
    REFERENCE_YEAR = "reference_year"
    UNIX_EPOCH = "unix_epoch"


DEFAULT_EPOCH_STRATEGIES = (
    EpochStrategy.GREGORIAN_DATE,
    EpochStrategy.REFERENCE_YEAR,
    EpochStrategy.UNIX_EPOCH,
)


@dataclass(frozen=True)
class EpochAnchor:
    timestamp: int  # Unix ms of offset 0
    strategy: EpochStrategy

    @property
    def exact(self) -> bool:
        return self.strategy is EpochStrategy.GREGORIAN_DATE


def _from_gregorian_date(cal: Calendar, diag: Diagnostics) -> Optional[int]:
    if not cal.epoch_gregorian_date:
        return None
    ms = parse_iso_timestamp(cal.epoch_gregorian_date)
    if ms is None:
        diag.warning(
            "epoch.invalid_gregorian_date",
            f"Invalid epochGregorianDate for {cal.name!r}: {cal.epoch_gregorian_date!r}",
            log=logger,
        )
        return None
    logger.debug("Using epochGregorianDate for %r: %s -> %d", cal.name, cal.epoch_gregorian_date, ms)
    return ms


def _from_reference_year(cal: Calendar, diag: Diagnostics) -> Optional[int]:
    if cal.reference_date is None or cal.reference_date.year is None:
        return None
    ref_year = cal.reference_date.year
    diag.warning(
        "epoch.approximated",
        f"Calendar {cal.name!r} missing epochGregorianDate. Using referenceDate.year ({ref_year}) "
        f"with a 365.25-day year approximation. This may be inaccurate.",
        log=logger,
    )
    return int((ref_year - UNIX_EPOCH_YEAR) * JULIAN_YEAR_DAYS * MS_PER_DAY)


def _unix_epoch(cal: Calendar, diag: Diagnostics) -> Optional[int]:
    diag.error(
        "epoch.unix_default",
        f"Calendar {cal.name!r} has no epochGregorianDate or referenceDate. "
        f"Defaulting to Unix epoch (1970-01-01). Timeline positioning will be INCORRECT.",
        log=logger,
    )
    return 0


_STRATEGIES: Dict[EpochStrategy, Callable[[Calendar, Diagnostics], Optional[int]]] = {
    EpochStrategy.GREGORIAN_DATE: _from_gregorian_date,
    EpochStrategy.REFERENCE_YEAR: _from_reference_year,
    EpochStrategy.UNIX_EPOCH: _unix_epoch,
}


def resolve_epoch(
    calendar: Calendar,
    strategies: Sequence[EpochStrategy] = DEFAULT_EPOCH_STRATEGIES,
    diag: Optional[Diagnostics] = None,
) -> EpochAnchor:
    diag = ensure(diag)
    for strategy in strategies:
        ms = _STRATEGIES[strategy](calendar, diag)
        if ms is not None:
            return EpochAnchor(ms, strategy)
    diag.error(
        "epoch.unresolved",
        f"No epoch strategy applied to calendar {calendar.name!r}; using the Unix epoch",
        log=logger,
    )
    return EpochAnchor(0, EpochStrategy.UNIX_EPOCH)


def get_epoch_timestamp(calendar: Calendar, diag: Optional[Diagnostics] = None) -> int:
    return resolve_epoch(calendar, diag=diag).timestamp
