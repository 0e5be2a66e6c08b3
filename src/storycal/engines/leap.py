"""
storycal.engines.leap
---------------------
Leap-year rules.

A rule chain generalises the Gregorian 4/100/400 rule:
divisor matches, unless exception_divisor matches, unless
exception_exception_divisor matches again.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.diagnostics import Diagnostics, ensure
from ..core.types import Calendar, LeapYearRule

logger = logging.getLogger(__name__)


def _divides(divisor: Optional[int], year: int) -> bool:
    return bool(divisor) and year % divisor == 0


def rule_matches(rule: LeapYearRule, year: int, diag: Optional[Diagnostics] = None) -> bool:
    if rule.kind == "divisible":
        if not _divides(rule.divisor, year):
            return False
        if _divides(rule.exception_divisor, year):
            return _divides(rule.exception_exception_divisor, year)
        return True
    if rule.kind == "modulo":
        return _divides(rule.divisor, year)
    if rule.kind == "custom":
        ensure(diag).warning("leap.custom_unsupported", "Custom leap year rules are not yet supported", log=logger)
        return False
    ensure(diag).warning("leap.unknown_kind", f"Unknown leap year rule kind {rule.kind!r}", log=logger)
    return False


def is_leap_year(year: int, calendar: Calendar, diag: Optional[Diagnostics] = None) -> bool:
    """True if any of the calendar's rules matches year."""
    diag = ensure(diag)
    return any(rule_matches(rule, year, diag) for rule in calendar.leap_year_rules)


def leap_days(year: int, calendar: Calendar, diag: Optional[Diagnostics] = None) -> int:
    """Extra days in year: each matching rule contributes its days_added."""
    diag = ensure(diag)
    return sum(rule.days_added for rule in calendar.leap_year_rules if rule_matches(rule, year, diag))


def days_in_year(year: int, calendar: Calendar, diag: Optional[Diagnostics] = None) -> int:
    """Nominal year length plus leap days; never below one day so year walks terminate."""
    base = calendar.days_per_year if (calendar.days_per_year or 0) > 0 else 365
    return max(1, base + leap_days(year, calendar, diag))
