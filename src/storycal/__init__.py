"""storycal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    convert,
    to_absolute_offset,
    from_absolute_offset,
    to_absolute_date,
    to_timestamp,
    date_to_timestamp,
    from_timestamp,
    get_epoch_timestamp,
    resolve_epoch,
    convert_to_gregorian,
    is_leap_year,
    days_in_year,
    days_in_month,
    list_calendars,
    get_calendar,
    register_calendar,
)
from .calendars import GREGORIAN
from .config import calendar_from_dict, calendar_to_dict, load_calendar, loads_calendar
from .core.diagnostics import Diagnostic, Diagnostics
from .core.errors import CalendarConfigError, StorycalError
from .core.types import (
    AbsoluteDate,
    Calendar,
    CalendarDate,
    CalendarMonth,
    ConversionResult,
    IndexedMonth,
    IntercalaryDay,
    LeapYearRule,
    LookupEntry,
    NamedMonth,
    SENTINEL_DATE,
)
from .engines.epoch import DEFAULT_EPOCH_STRATEGIES, EpochAnchor, EpochStrategy
from .formatting import (
    format_date,
    get_month_name,
    get_month_names,
    get_days_per_month,
    day_of_year,
    is_intercalary_day,
)
from .validation import validate_calendar, validate_custom_date

__all__ = [
    "convert",
    "to_absolute_offset",
    "from_absolute_offset",
    "to_absolute_date",
    "to_timestamp",
    "date_to_timestamp",
    "from_timestamp",
    "get_epoch_timestamp",
    "resolve_epoch",
    "convert_to_gregorian",
    "is_leap_year",
    "days_in_year",
    "days_in_month",
    "list_calendars",
    "get_calendar",
    "register_calendar",
    "GREGORIAN",
    "calendar_from_dict",
    "calendar_to_dict",
    "load_calendar",
    "loads_calendar",
    "Diagnostic",
    "Diagnostics",
    "CalendarConfigError",
    "StorycalError",
    "AbsoluteDate",
    "Calendar",
    "CalendarDate",
    "CalendarMonth",
    "ConversionResult",
    "IndexedMonth",
    "IntercalaryDay",
    "LeapYearRule",
    "LookupEntry",
    "NamedMonth",
    "SENTINEL_DATE",
    "DEFAULT_EPOCH_STRATEGIES",
    "EpochAnchor",
    "EpochStrategy",
    "format_date",
    "get_month_name",
    "get_month_names",
    "get_days_per_month",
    "day_of_year",
    "is_intercalary_day",
    "validate_calendar",
    "validate_custom_date",
]
