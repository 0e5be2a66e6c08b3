from __future__ import annotations
from storycal.core.registry import CalendarRegistry
from storycal.calendars import ALL_CALENDARS

def build_registry() -> CalendarRegistry:
    return CalendarRegistry(dict(ALL_CALENDARS))
