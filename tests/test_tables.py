# tests/test_tables.py

import logging

import pytest

from storycal import (
    Calendar,
    CalendarDate,
    CalendarMonth,
    IndexedMonth,
    IntercalaryDay,
    LeapYearRule,
    LookupEntry,
    NamedMonth,
    to_absolute_offset,
)
from storycal.tables import (
    build_lookup_table,
    export_json,
    import_json,
    merge_lookup_tables,
    sample_table,
    simple_table,
    validate_lookup_table,
)


@pytest.fixture
def tiny():
    """Five-day year (A: 3 days, B: 2 days), leap day every even year."""
    return Calendar(
        name="Tiny",
        days_per_year=5,
        months=(CalendarMonth("A", 3), CalendarMonth("B", 2)),
        reference_date=CalendarDate(0, 1, 1),
        leap_year_rules=(LeapYearRule("modulo", divisor=2),),
    )


def test_build_enumerates_month_days_with_leap_gaps(tiny):
    entries = build_lookup_table(tiny, 0, 1)
    assert len(entries) == 10
    assert entries[0] == LookupEntry(0, NamedMonth("A"), 1, 0)
    assert entries[4] == LookupEntry(0, NamedMonth("B"), 2, 4)
    assert entries[5] == LookupEntry(1, NamedMonth("A"), 1, 6)

    report = validate_lookup_table(entries)
    assert report.valid
    assert report.errors == ()
    assert report.warnings == ("Gap of 1 days between 0-B-2 and 1-A-1",)


def test_intercalary_days_are_inserted(tiny):
    from dataclasses import replace

    cal = replace(tiny, intercalary_days=(IntercalaryDay("Festival", 4), IntercalaryDay("Ghost", 5, counted=False)))
    entries = build_lookup_table(cal, 0, 0, include_intercalary=True)
    assert [(str(e.month), e.day, e.absolute_day_offset) for e in entries] == [
        ("A", 1, 0),
        ("A", 2, 1),
        ("A", 3, 2),
        ("Festival", 1, 3),
        ("B", 1, 4),
        ("B", 2, 5),
    ]
    assert entries[3].is_intercalary
    assert len(build_lookup_table(cal, 0, 0)) == 5


@pytest.mark.parametrize("start", [-3, 0, 2])
def test_aligned_table_matches_arithmetic_offsets(tiny, start):
    entries = build_lookup_table(tiny, start, start + 2, align_to_reference=True)
    for e in entries:
        assert e.absolute_day_offset == to_absolute_offset(e.date, tiny)


def test_reference_day_offset_shifts_table(tiny):
    entries = build_lookup_table(tiny, 0, 0, reference_day_offset=100)
    assert [e.absolute_day_offset for e in entries] == [100, 101, 102, 103, 104]


def test_monthless_build_and_simple_table():
    cal = Calendar(name="Plain", days_per_year=3, reference_date=CalendarDate(1, 1, 1))
    assert build_lookup_table(cal, 1, 1) == [
        LookupEntry(1, IndexedMonth(1), 1, 0),
        LookupEntry(1, IndexedMonth(1), 2, 1),
        LookupEntry(1, IndexedMonth(1), 3, 2),
    ]
    table = simple_table(3, 1, 2)
    assert [e.absolute_day_offset for e in table] == list(range(6))
    assert table[3].date == CalendarDate(2, 1, 1)


def test_sample_table_starts_at_reference_year(tiny):
    entries = sample_table(tiny, years=2)
    assert entries[0].year == 0
    assert entries[-1].year == 1


def test_validate_reports_errors():
    assert not validate_lookup_table([]).valid

    entries = [
        LookupEntry(1, 1, 1, 0),
        LookupEntry(1, 1, 1, 1),
        LookupEntry(1, 1, 2, 1),
    ]
    report = validate_lookup_table(entries)
    assert not report.valid
    assert "Duplicate date: 1-1-1" in report.errors
    assert "Duplicate offset: 1" in report.errors
    assert "Negative or zero gap between 1-1-1 and 1-1-2" in report.errors


def test_merge_keeps_first_and_sorts():
    a = [LookupEntry(1, 1, 2, 1), LookupEntry(1, 1, 1, 0)]
    b = [LookupEntry(1, 1, 1, 99), LookupEntry(1, 1, 3, 2)]
    merged = merge_lookup_tables(a, b)
    assert [e.absolute_day_offset for e in merged] == [0, 1, 2]


def test_json_round_trip(tiny):
    from dataclasses import replace

    cal = replace(tiny, intercalary_days=(IntercalaryDay("Festival", 4),))
    entries = build_lookup_table(cal, 0, 1, include_intercalary=True)
    assert import_json(export_json(entries)) == entries
    assert '"absoluteDayOffset": 0' in export_json(entries[:1])


def test_import_json_rejects_garbage(caplog):
    with caplog.at_level(logging.ERROR, logger="storycal.tables"):
        assert import_json("{not json") == []
        assert import_json('{"year": 1}') == []
    assert len(caplog.records) == 2
