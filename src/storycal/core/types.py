from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple, Union


@dataclass(frozen=True)
class NamedMonth:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IndexedMonth:
    index: int  # 1-based; 0 means "no month given"

    def __str__(self) -> str:
        return str(self.index)


MonthRef = Union[NamedMonth, IndexedMonth]
MonthLike = Union[MonthRef, str, int, None]


def month_ref(value: MonthLike) -> MonthRef:
    """Coerce a raw month value (name, 1-based index or None) to a MonthRef."""
    if isinstance(value, (NamedMonth, IndexedMonth)):
        return value
    if value is None:
        return IndexedMonth(0)
    if isinstance(value, bool):
        raise TypeError("month must be a name or an integer index, not bool")
    if isinstance(value, int):
        return IndexedMonth(value)
    if isinstance(value, str):
        return NamedMonth(value)
    raise TypeError(f"month must be a name or an integer index, got {type(value).__name__}")


@dataclass(frozen=True)
class CalendarDate:
    """
    A date expressed in one specific calendar.

    month 0 / day 0 mean "not given" (year or month precision).
    The all-zero date is the degraded sentinel returned by failed lookups.
    """
    year: Optional[int]
    month: MonthRef = IndexedMonth(0)
    day: int = 0
    time: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "month", month_ref(self.month))

    def __str__(self) -> str:
        s = f"{self.year}-{self.month}-{self.day}"
        return f"{s}T{self.time}" if self.time else s

    @property
    def is_sentinel(self) -> bool:
        return self.year == 0 and self.month == IndexedMonth(0) and self.day == 0

    def with_time(self, time: Optional[str]) -> "CalendarDate":
        return CalendarDate(self.year, self.month, self.day, time)


SENTINEL_DATE = CalendarDate(0, IndexedMonth(0), 0)


@dataclass(frozen=True)
class CalendarMonth:
    name: str
    days: int


@dataclass(frozen=True)
class LeapYearRule:
    kind: Literal["divisible", "modulo", "custom"]
    divisor: Optional[int] = None
    exception_divisor: Optional[int] = None
    exception_exception_divisor: Optional[int] = None
    days_added: int = 1
    description: Optional[str] = None


@dataclass(frozen=True)
class LookupEntry:
    year: int
    month: MonthRef
    day: int
    absolute_day_offset: int
    is_intercalary: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "month", month_ref(self.month))

    @property
    def date(self) -> CalendarDate:
        return CalendarDate(self.year, self.month, self.day)


@dataclass(frozen=True)
class IntercalaryDay:
    name: str
    day_of_year: int
    description: Optional[str] = None
    counted: bool = True


@dataclass(frozen=True)
class Calendar:
    """Declarative description of one calendar system."""
    name: str = ""
    days_per_year: Optional[int] = None
    months: Tuple[CalendarMonth, ...] = ()
    reference_date: Optional[CalendarDate] = None
    epoch_gregorian_date: Optional[str] = None
    leap_year_rules: Tuple[LeapYearRule, ...] = ()
    is_lookup_table: bool = False
    lookup_table: Optional[Tuple[LookupEntry, ...]] = None
    intercalary_days: Tuple[IntercalaryDay, ...] = ()
    hours_per_day: Optional[int] = None
    minutes_per_hour: Optional[int] = None
    seconds_per_minute: Optional[int] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept lists from callers but keep the instance hashable.
        object.__setattr__(self, "months", tuple(self.months))
        object.__setattr__(self, "leap_year_rules", tuple(self.leap_year_rules))
        object.__setattr__(self, "intercalary_days", tuple(self.intercalary_days))
        if self.lookup_table is not None:
            object.__setattr__(self, "lookup_table", tuple(self.lookup_table))

    @property
    def epoch_year(self) -> int:
        if self.reference_date is None or self.reference_date.year is None:
            return 0
        return self.reference_date.year

    @property
    def uses_lookup_table(self) -> bool:
        return self.is_lookup_table and self.lookup_table is not None

    def month_index(self, month: MonthRef) -> Optional[int]:
        """Resolve a month reference to its 1-based position, if it exists."""
        if isinstance(month, IndexedMonth):
            if 1 <= month.index <= len(self.months):
                return month.index
            return None
        for i, m in enumerate(self.months):
            if m.name == month.name:
                return i + 1
        return None


@dataclass(frozen=True)
class AbsoluteDate:
    day_offset: int
    time_of_day: int  # milliseconds within the day
    calendar: Calendar
    source_date: CalendarDate


Precision = Literal["year", "month", "day", "time"]


@dataclass(frozen=True)
class ConversionResult:
    source_date: CalendarDate
    target_date: CalendarDate
    timestamp: int
    precision: Precision
    warnings: Tuple[str, ...] = field(default=())
