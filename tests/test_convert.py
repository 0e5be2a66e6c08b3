# tests/test_convert.py

from datetime import date

import pytest

import storycal
from storycal import (
    GREGORIAN,
    Calendar,
    CalendarDate,
    Diagnostics,
    NamedMonth,
    convert,
    convert_to_gregorian,
    days_in_month,
    days_in_year,
)


def test_convert_between_calendars(faerun, scenario_cal):
    res = convert(CalendarDate(1492, "Ches", 5), faerun, scenario_cal)
    assert res.source_date == CalendarDate(1492, "Ches", 5)
    # offset 64 in the scenario calendar is year 0, M3 day 5
    assert res.target_date == CalendarDate(0, NamedMonth("M3"), 5)
    assert res.precision == "day"
    assert res.warnings == ()
    assert res.timestamp == storycal.date_to_timestamp(CalendarDate(1492, "Ches", 5), faerun)


@pytest.mark.parametrize(
    "d,precision",
    [
        (CalendarDate(1492), "year"),
        (CalendarDate(1492, "Ches"), "month"),
        (CalendarDate(1492, "Ches", 5), "day"),
        (CalendarDate(1492, "Ches", 5, "10:00"), "time"),
    ],
)
def test_precision(faerun, d, precision):
    assert convert(d, faerun, faerun).precision == precision


def test_convert_preserves_time(faerun):
    res = convert(CalendarDate(1492, "Ches", 5, "06:30"), faerun, faerun)
    assert res.target_date == CalendarDate(1492, "Ches", 5, "06:30:00")


def test_convert_collects_warnings(faerun):
    bare = Calendar(name="Bare", days_per_year=100)
    d = Diagnostics()
    res = convert(CalendarDate(3, 1, 1), bare, faerun, diag=d)
    assert res.warnings
    assert d.has("epoch.unix_default")
    assert res.timestamp == 300 * 86400000


def test_gregorian_round_trip_in_first_two_months():
    for d in (CalendarDate(1970, "January", 1), CalendarDate(2024, "February", 28), CalendarDate(1800, "January", 31)):
        ms = storycal.date_to_timestamp(d, GREGORIAN)
        assert storycal.from_timestamp(ms, GREGORIAN) == d


def test_convert_to_gregorian(faerun):
    assert convert_to_gregorian(CalendarDate(1492, "Hammer", 1), faerun) == date(1492, 1, 1)
    assert convert_to_gregorian(CalendarDate(1492, "Alturiak", 2), faerun) == date(1492, 2, 1)


def test_convert_to_gregorian_out_of_range(faerun):
    d = Diagnostics()
    assert convert_to_gregorian(CalendarDate(-5000, 1, 1), faerun, diag=d) is None
    assert d.has("gregorian.out_of_range")


def test_calendar_arithmetic_wrappers(scenario_cal):
    assert storycal.is_leap_year(8, scenario_cal)
    assert days_in_year(8, scenario_cal) == 361
    assert days_in_month(2, scenario_cal) == 30


def test_registry():
    assert "gregorian" in storycal.list_calendars()
    assert storycal.get_calendar("gregorian") is GREGORIAN
    with pytest.raises(KeyError):
        storycal.get_calendar("nope")

    cal = Calendar(name="Registered")
    storycal.register_calendar("registered-test", cal, overwrite=True)
    assert storycal.get_calendar("registered-test") is cal
    with pytest.raises(KeyError):
        storycal.register_calendar("registered-test", cal)


def test_make_engine_rejects_non_calendars():
    from storycal.engines.factory import make_engine

    with pytest.raises(TypeError):
        make_engine({"name": "dict"})


def test_result_warnings_belong_to_their_conversion(faerun):
    d = Diagnostics()
    bad = convert(CalendarDate(3, 1, 1), Calendar(name="Bare", days_per_year=100), faerun, diag=d)
    clean = convert(CalendarDate(1492, "Ches", 5), faerun, faerun, diag=d)
    assert bad.warnings
    assert clean.warnings == ()
    assert d.has("epoch.unix_default")


def test_repeated_warning_is_reported_each_time(faerun):
    d = Diagnostics()
    bare = Calendar(name="Bare", days_per_year=100)
    first = convert(CalendarDate(3, 1, 1), bare, faerun, diag=d)
    second = convert(CalendarDate(3, 1, 1), bare, faerun, diag=d)
    assert first.warnings == second.warnings != ()
    assert d.codes().count("epoch.unix_default") == 1
