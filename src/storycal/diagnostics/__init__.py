"""Diagnostics package.

- round_trip: random date -> offset -> date checks against one calendar
"""

__all__ = ["round_trip"]
