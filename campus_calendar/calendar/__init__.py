"""
Calendar Module - Event parsing, categories and view layouts.

Everything in this package is synchronous and pure: it turns a list of
events plus a frame (day, week, month, year) into a layout tree. Fetching
and navigation live in campus_calendar.services.
"""

from campus_calendar.calendar.categories import EVENT_CATEGORIES, get_category
from campus_calendar.calendar.parser import parse_instant
from campus_calendar.calendar.schemas import (
    CalendarLayout,
    CategoryDescriptor,
    Event,
    PositionedEvent,
)

__all__ = [
    "EVENT_CATEGORIES",
    "get_category",
    "parse_instant",
    "CalendarLayout",
    "CategoryDescriptor",
    "Event",
    "PositionedEvent",
]
