# tests/test_formatting.py

from storycal import (
    Calendar,
    CalendarDate,
    IntercalaryDay,
    day_of_year,
    format_date,
    get_days_per_month,
    get_month_name,
    get_month_names,
    is_intercalary_day,
)


def test_month_names(faerun):
    assert get_month_name(3, faerun) == "Ches"
    assert get_month_name("Frostmoon", faerun) == "Frostmoon"
    assert get_month_name(13, faerun) == "Month 13"
    assert get_month_names(faerun)[0] == "Hammer"
    assert get_days_per_month(faerun) == [30] * 12


def test_format_styles(faerun):
    d = CalendarDate(1492, "Mirtul", 5, "10:15")
    assert format_date(d, faerun) == "5 Mirtul 1492"
    assert format_date(d, faerun, "short") == "5 Mirtul 1492"
    assert format_date(d, faerun, "full") == "5 Mirtul 1492 10:15"


def test_format_partial_dates(faerun):
    assert format_date(CalendarDate(1492, 2), faerun) == "Alturiak 1492"
    assert format_date(CalendarDate(1492), faerun) == "1492"


def test_monthless_calendar_gets_synthetic_names():
    cal = Calendar(name="Plain", days_per_year=100)
    assert get_month_names(cal) == ["Month 1", "Month 2", "Month 3", "Month 4"]
    assert get_days_per_month(cal) == [30, 30, 30, 30]
    assert get_month_name(2, cal) == "Month 2"


def test_day_of_year_and_intercalary(faerun):
    from dataclasses import replace

    cal = replace(faerun, intercalary_days=(IntercalaryDay("Midwinter", 31),))
    assert day_of_year(CalendarDate(1492, "Hammer", 30), cal) == 30
    assert day_of_year(CalendarDate(1492, "Alturiak", 1), cal) == 31
    assert is_intercalary_day(CalendarDate(1492, "Alturiak", 1), cal).name == "Midwinter"
    assert is_intercalary_day(CalendarDate(1492, "Alturiak", 2), cal) is None
    assert is_intercalary_day(CalendarDate(1492, "Alturiak", 1), faerun) is None
