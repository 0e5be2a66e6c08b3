# tests/test_epoch.py

import math
from datetime import datetime, timezone

import pytest

from storycal import (
    SENTINEL_DATE,
    AbsoluteDate,
    Calendar,
    CalendarDate,
    Diagnostics,
    EpochStrategy,
    NamedMonth,
    date_to_timestamp,
    from_timestamp,
    get_epoch_timestamp,
    resolve_epoch,
    to_absolute_date,
    to_timestamp,
)
from storycal.core.time import MS_PER_DAY, parse_iso_timestamp, parse_time_of_day, format_time_of_day


def _utc_ms(*args):
    dt = datetime(*args, tzinfo=timezone.utc)
    return int((dt - datetime(1970, 1, 1, tzinfo=timezone.utc)).total_seconds() * 1000)


def test_gregorian_anchor_is_exact(lookup_cal):
    d = Diagnostics()
    anchor = resolve_epoch(lookup_cal, diag=d)
    assert anchor.strategy is EpochStrategy.GREGORIAN_DATE
    assert anchor.exact
    assert anchor.timestamp == _utc_ms(1492, 1, 1)
    assert len(d) == 0


def test_offset_zero_lands_on_epoch(faerun):
    absolute = to_absolute_date(CalendarDate(1492, "Hammer", 1), faerun)
    assert absolute.day_offset == 0
    assert to_timestamp(absolute) == _utc_ms(1492, 1, 1)


def test_reference_year_approximation_warns():
    cal = Calendar(name="Old", days_per_year=365, reference_date=CalendarDate(1500, 1, 1))
    d = Diagnostics()
    ms = get_epoch_timestamp(cal, diag=d)
    assert ms == int((1500 - 1970) * 365.25 * 86400000)
    assert d.has("epoch.approximated")
    assert [r.level for r in d.warnings] == ["warning"]
    assert resolve_epoch(cal).strategy is EpochStrategy.REFERENCE_YEAR


def test_reference_year_zero_still_approximates():
    cal = Calendar(name="Zero", reference_date=CalendarDate(0, 1, 1))
    assert get_epoch_timestamp(cal) == int(-1970 * 365.25 * MS_PER_DAY)


def test_no_anchor_defaults_to_unix_epoch():
    d = Diagnostics()
    assert get_epoch_timestamp(Calendar(name="Nowhere"), diag=d) == 0
    assert d.has("epoch.unix_default")
    assert d.records[-1].level == "error"


def test_invalid_gregorian_date_falls_through():
    cal = Calendar(name="Typo", reference_date=CalendarDate(1970, 1, 1), epoch_gregorian_date="1492-02-30")
    d = Diagnostics()
    anchor = resolve_epoch(cal, diag=d)
    assert anchor.strategy is EpochStrategy.REFERENCE_YEAR
    assert anchor.timestamp == 0
    assert d.codes() == ["epoch.invalid_gregorian_date", "epoch.approximated"]


def test_strategy_order_is_configurable(faerun):
    anchor = resolve_epoch(faerun, strategies=(EpochStrategy.REFERENCE_YEAR,))
    assert anchor.strategy is EpochStrategy.REFERENCE_YEAR
    assert not anchor.exact
    anchor = resolve_epoch(faerun, strategies=(EpochStrategy.UNIX_EPOCH,))
    assert anchor.timestamp == 0


def test_timestamp_uses_absolute_dates_own_calendar(faerun):
    absolute = AbsoluteDate(10, 0, faerun, CalendarDate(1492, "Hammer", 11))
    assert to_timestamp(absolute) == _utc_ms(1492, 1, 11)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1970-01-01", 0),
        ("1970-01-02T00:00:00Z", MS_PER_DAY),
        ("1970-01-01T01:00:00+01:00", 0),
        ("1492", None),
        ("1492-01-01", None),
        ("2000-13-01", "invalid"),
        ("2023-02-29", "invalid"),
        ("not a date", "invalid"),
    ],
)
def test_parse_iso_timestamp(text, expected):
    ms = parse_iso_timestamp(text)
    if expected == "invalid":
        assert ms is None
    elif expected is None:
        assert ms == _utc_ms(1492, 1, 1)
    else:
        assert ms == expected


def test_parse_iso_timestamp_before_year_one():
    # astronomical year 0 is 1 BCE, a leap year
    assert parse_iso_timestamp("0000-03-01") - parse_iso_timestamp("0000-02-28") == 2 * MS_PER_DAY
    assert parse_iso_timestamp("-0001-12-31") == parse_iso_timestamp("0000-01-01") - MS_PER_DAY


def test_timestamp_round_trip(faerun):
    random_dates = [
        CalendarDate(1492, "Hammer", 1),
        CalendarDate(1300, "Flamerule", 30),
        CalendarDate(1600, "Uktar", 2, "23:59:59"),
    ]
    for d0 in random_dates:
        assert from_timestamp(date_to_timestamp(d0, faerun), faerun) == CalendarDate(
            d0.year, NamedMonth(str(d0.month)), d0.day, d0.time
        )


def test_from_timestamp_floors_before_epoch(faerun):
    epoch = _utc_ms(1492, 1, 1)
    assert from_timestamp(epoch - 1, faerun) == CalendarDate(1491, "Nightal", 30, "23:59:59")
    assert from_timestamp(epoch + 0.9, faerun) == CalendarDate(1492, "Hammer", 1)


@pytest.mark.parametrize("bad", [math.nan, math.inf, "1492", None, True])
def test_invalid_timestamp_returns_sentinel(faerun, bad):
    d = Diagnostics()
    assert from_timestamp(bad, faerun, diag=d) == SENTINEL_DATE
    assert d.has("timestamp.invalid")
    assert d.records[0].level == "error"


def test_custom_time_units():
    cal = Calendar(
        name="Long days",
        days_per_year=100,
        reference_date=CalendarDate(0, 1, 1),
        epoch_gregorian_date="1970-01-01",
        hours_per_day=20,
        minutes_per_hour=100,
        seconds_per_minute=100,
    )
    # one custom hour = 100 * 100 s
    assert parse_time_of_day("01:00", cal) == 10_000_000
    assert parse_time_of_day("00:01:05", cal) == 105_000
    assert format_time_of_day(10_105_000, cal) == "01:01:05"
    assert date_to_timestamp(CalendarDate(0, 1, 1, "02:00"), cal) == 20_000_000


def test_malformed_time_is_midnight(faerun):
    assert parse_time_of_day("noon", faerun) == 0
    assert parse_time_of_day("7:xx", faerun) == 7 * 3600 * 1000


@pytest.mark.parametrize("ms", [1e300, -1e300, 10**20])
def test_far_timestamps_return_sentinel(faerun, ms):
    d = Diagnostics()
    assert from_timestamp(ms, faerun, diag=d) == SENTINEL_DATE
    assert d.has("timestamp.invalid")
