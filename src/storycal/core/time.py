from __future__ import annotations
import math
import re
from datetime import date
from typing import Optional, Tuple

MS_PER_SECOND = 1000
MS_PER_DAY = 24 * 60 * 60 * MS_PER_SECOND

# JDN of the Unix epoch, 1970-01-01.
JDN_UNIX_EPOCH = 2440588


def gregorian_to_jdn(y: int, m: int, day: int) -> int:
    """Proleptic Gregorian date -> Julian Day Number (works for years <= 0 too)."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_gregorian(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of gregorian_to_jdn, as (year, month, day)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def gregorian_month_days(y: int, m: int) -> int:
    if m == 12:
        return gregorian_to_jdn(y + 1, 1, 1) - gregorian_to_jdn(y, 12, 1)
    return gregorian_to_jdn(y, m + 1, 1) - gregorian_to_jdn(y, m, 1)


def timestamp_to_date(ms: int) -> date:
    """Unix milliseconds -> civil UTC date. Raises ValueError outside datetime.date range."""
    y, m, d = jdn_to_gregorian(JDN_UNIX_EPOCH + math.floor(ms / MS_PER_DAY))
    return date(y, m, d)


# ============================================================
# ISO-8601 (proleptic Gregorian) -> Unix milliseconds
# ============================================================

_ISO_RE = re.compile(
    r"^(?P<year>[+-]?\d{4,6})"
    r"(?:-(?P<month>\d{2})(?:-(?P<day>\d{2}))?)?"
    r"(?:[T ](?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<frac>\d{1,9}))?)?)?"
    r"(?P<tz>Z|[+-]\d{2}:?\d{2})?$"
)


def parse_iso_timestamp(text: str) -> Optional[int]:
    """
    Parse an ISO-8601 Gregorian date(-time) into Unix milliseconds.

    Date-only values are midnight UTC. Returns None for anything that is not a
    real calendar instant (bad format, month 13, February 30th, ...).
    """
    if not isinstance(text, str):
        return None
    mt = _ISO_RE.match(text.strip())
    if mt is None:
        return None

    y = int(mt["year"])
    m = int(mt["month"] or 1)
    d = int(mt["day"] or 1)
    if not (1 <= m <= 12) or not (1 <= d <= gregorian_month_days(y, m)):
        return None

    hh = int(mt["hour"] or 0)
    mi = int(mt["minute"] or 0)
    ss = int(mt["second"] or 0)
    if hh > 24 or mi > 59 or ss > 59 or (hh == 24 and (mi or ss)):
        return None
    frac = mt["frac"] or "0"
    ms = int(frac[:3].ljust(3, "0"))

    tz = mt["tz"]
    tz_minutes = 0
    if tz and tz != "Z":
        sign = -1 if tz[0] == "-" else 1
        digits = tz[1:].replace(":", "")
        tz_minutes = sign * (int(digits[:2]) * 60 + int(digits[2:]))

    days = gregorian_to_jdn(y, m, d) - JDN_UNIX_EPOCH
    seconds = ((hh * 60 + mi) - tz_minutes) * 60 + ss
    return days * MS_PER_DAY + seconds * MS_PER_SECOND + ms


# ============================================================
# Time of day in custom sub-day units
# ============================================================

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(s: str) -> int:
    mt = _LEADING_INT.match(s)
    return int(mt.group(1)) if mt else 0


def sub_day_units(calendar) -> Tuple[int, int, int]:
    """(hours_per_day, minutes_per_hour, seconds_per_minute), defaulting to 24/60/60."""
    return (
        calendar.hours_per_day or 24,
        calendar.minutes_per_hour or 60,
        calendar.seconds_per_minute or 60,
    )


def parse_time_of_day(text: str, calendar) -> int:
    """"HH:MM[:SS]" in the calendar's own units -> milliseconds within the day."""
    parts = text.split(":")
    if len(parts) < 2:
        return 0
    hours = _leading_int(parts[0])
    minutes = _leading_int(parts[1])
    seconds = _leading_int(parts[2]) if len(parts) > 2 else 0

    _, minutes_per_hour, seconds_per_minute = sub_day_units(calendar)
    ms_per_minute = seconds_per_minute * MS_PER_SECOND
    ms_per_hour = minutes_per_hour * ms_per_minute
    return hours * ms_per_hour + minutes * ms_per_minute + seconds * MS_PER_SECOND


def format_time_of_day(ms: int, calendar) -> str:
    """Milliseconds within the day -> "HH:MM:SS" in the calendar's own units."""
    _, minutes_per_hour, seconds_per_minute = sub_day_units(calendar)
    ms_per_minute = seconds_per_minute * MS_PER_SECOND
    ms_per_hour = minutes_per_hour * ms_per_minute

    hours = ms // ms_per_hour
    minutes = (ms % ms_per_hour) // ms_per_minute
    seconds = (ms % ms_per_minute) // MS_PER_SECOND
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
