# tests/conftest.py

import pytest

from storycal import (
    Calendar,
    CalendarDate,
    CalendarMonth,
    Diagnostics,
    LeapYearRule,
    LookupEntry,
)

THIRTY_DAY_MONTHS = tuple(CalendarMonth(f"M{i}", 30) for i in range(1, 13))

FAERUN_MONTHS = (
    CalendarMonth("Hammer", 30),
    CalendarMonth("Alturiak", 30),
    CalendarMonth("Ches", 30),
    CalendarMonth("Tarsakh", 30),
    CalendarMonth("Mirtul", 30),
    CalendarMonth("Kythorn", 30),
    CalendarMonth("Flamerule", 30),
    CalendarMonth("Eleasis", 30),
    CalendarMonth("Eleint", 30),
    CalendarMonth("Marpenoth", 30),
    CalendarMonth("Uktar", 30),
    CalendarMonth("Nightal", 30),
)


@pytest.fixture
def diag():
    return Diagnostics()


@pytest.fixture
def scenario_cal():
    """Twelve 30-day months, reference year 0, one leap day every 4 years."""
    return Calendar(
        name="Scenario",
        days_per_year=360,
        months=THIRTY_DAY_MONTHS,
        reference_date=CalendarDate(0, 1, 1),
        leap_year_rules=(LeapYearRule("divisible", divisor=4, days_added=1),),
    )


@pytest.fixture
def faerun():
    return Calendar(
        id="harptos",
        name="Harptos",
        days_per_year=360,
        months=FAERUN_MONTHS,
        reference_date=CalendarDate(1492, "Hammer", 1),
        epoch_gregorian_date="1492-01-01",
    )


@pytest.fixture
def lookup_cal():
    return Calendar(
        name="Irregular",
        is_lookup_table=True,
        reference_date=CalendarDate(0, 1, 1),
        epoch_gregorian_date="1492-01-01",
        lookup_table=(LookupEntry(12, 3, 5, 900),),
    )


@pytest.fixture
def sparse_lookup_cal():
    return Calendar(
        name="Sparse",
        is_lookup_table=True,
        reference_date=CalendarDate(1, 1, 1),
        epoch_gregorian_date="2000-01-01",
        lookup_table=(
            LookupEntry(1, 1, 1, 0),
            LookupEntry(1, 2, 1, 10),
            LookupEntry(2, 1, 1, 20),
        ),
    )
