"""
Base classes and interfaces for event sources.

The calendar core never talks to a remote service directly. It depends on
the small EventSource contract below, and the application decides at
construction time which implementation to hand it:

- a live source (e.g. HolidayEventSource) that fetches over HTTP
- NullEventSource, a no-op used when remote data is disabled or its
  client cannot be built; the calendar then runs on local events only

Design Pattern: Strategy + Null Object
======================================
The loader calls `fetch_events_for_year` without caring which one it got,
so there is no import-failure handling inside the core.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from campus_calendar.calendar.schemas import Event


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class CalendarError(Exception):
    """Base exception for all calendar errors."""
    pass


class EventSourceError(CalendarError):
    """Raised when fetching a year of events fails."""

    def __init__(
        self,
        message: str,
        year: Optional[int] = None,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message)
        self.year = year
        self.status_code = status_code
        self.response = response


class EventSourceUnavailableError(CalendarError):
    """Raised when the live event source cannot be constructed."""
    pass


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASS
# ---------------------------------------------------------------------------


class EventSource(ABC):
    """
    Abstract base class for remote event sources.

    A single call must return the complete event set of one calendar year;
    there is no pagination.

    Example Implementation:
        class ExamTimetableSource(EventSource):
            source_name = "exams"

            async def fetch_events_for_year(self, year: int) -> List[Event]:
                ...
    """

    # Unique identifier for this source (e.g. "holidays", "null")
    source_name: str = ""

    # False for sources that never return data
    is_live: bool = True

    @abstractmethod
    async def fetch_events_for_year(self, year: int) -> List[Event]:
        """
        Fetch every event of a calendar year.

        Args:
            year: Calendar year, e.g. 2024

        Returns:
            List of Event objects

        Raises:
            EventSourceError: If the fetch fails
        """
        pass


class NullEventSource(EventSource):
    """Event source that always returns nothing."""

    source_name = "null"
    is_live = False

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason

    async def fetch_events_for_year(self, year: int) -> List[Event]:
        return []
