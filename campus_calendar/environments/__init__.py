"""
Environments Module - External event sources.

environments/
├── __init__.py      # Module exports
├── base.py          # EventSource contract, NullEventSource, error types
├── factory.py       # Picks the live or null source from settings
└── holidays/        # Public holidays over HTTP + academic calendar
    ├── academic.py  # Fixed academic dates and offline fallback data
    ├── client.py    # HolidayEventSource (httpx)
    └── schemas.py   # API response models
"""

from campus_calendar.environments.base import (
    CalendarError,
    EventSource,
    EventSourceError,
    EventSourceUnavailableError,
    NullEventSource,
)
from campus_calendar.environments.factory import build_event_source

__all__ = [
    "CalendarError",
    "EventSource",
    "EventSourceError",
    "EventSourceUnavailableError",
    "NullEventSource",
    "build_event_source",
]
