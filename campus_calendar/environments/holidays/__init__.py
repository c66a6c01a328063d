"""
Holidays Module - Public holiday and academic calendar events.

Provides the live EventSource used by the calendar: public holidays from a
Nager.Date compatible API plus the university's fixed academic dates.
"""

from campus_calendar.environments.holidays.academic import academic_events, fallback_events
from campus_calendar.environments.holidays.client import HolidayEventSource
from campus_calendar.environments.holidays.schemas import PublicHoliday

__all__ = [
    "HolidayEventSource",
    "PublicHoliday",
    "academic_events",
    "fallback_events",
]
