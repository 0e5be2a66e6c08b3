class StorycalError(Exception):
    """Base error."""

class CalendarConfigError(StorycalError):
    """Raised when a calendar document is not a calendar at all (wrong type, unparseable YAML)."""
