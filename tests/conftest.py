"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- A fixed "now" (Sunday 2024-03-10 09:30) and a clock returning it
- Event factories
- A mocked EventSource (AsyncMock fetch)
- A FastAPI TestClient bound to a fresh calendar session
"""

from datetime import datetime
from typing import Callable, Dict, Generator, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from campus_calendar.calendar.parser import clear_parse_cache
from campus_calendar.calendar.schemas import Event
from campus_calendar.environments.base import EventSource, NullEventSource
from campus_calendar.main import app
from campus_calendar.routers.calendar import get_session
from campus_calendar.services.calendar_session import CalendarSession
from campus_calendar.services.calendar_state import CalendarState


FIXED_NOW = datetime(2024, 3, 10, 9, 30)


# ---------------------------------------------------------------------------
# PARSER CACHE
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_parse_cache() -> Generator[None, None, None]:
    """Start every test with an empty parse cache so log assertions hold."""
    clear_parse_cache()
    yield
    clear_parse_cache()


# ---------------------------------------------------------------------------
# CLOCK FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def now() -> datetime:
    """Sunday, March 10 2024, 09:30 local."""
    return FIXED_NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    return lambda: now


# ---------------------------------------------------------------------------
# EVENT FIXTURES
# ---------------------------------------------------------------------------

def make_event(
    event_id: str,
    start: Optional[str],
    end: Optional[str] = None,
    category: Optional[str] = "ACADEMIC",
    title: Optional[str] = None,
    **extra,
) -> Event:
    """Build an event the way the source sends it."""
    payload = {
        "id": event_id,
        "title": title or f"Event {event_id}",
        "date": start.split("T")[0] if start else None,
        "datetime": start,
        "endDatetime": end,
        "category": category,
    }
    payload.update(extra)
    return Event.model_validate(payload)


@pytest.fixture
def event_factory() -> Callable[..., Event]:
    return make_event


@pytest.fixture
def sample_events() -> List[Event]:
    """A small mixed set around the fixed date."""
    return [
        make_event("lecture", "2024-03-10T09:30", "2024-03-10T10:00", "ACADEMIC", "Linear Algebra"),
        make_event("holi", "2024-03-25", None, "FESTIVAL", "Holi", time="All Day", isAllDay=True),
        make_event("board", "2024-03-12T14:00", "2024-03-12T15:30", "ADMINISTRATIVE", "Board Meeting"),
        make_event("broken", "not-a-date", None, "HOLIDAY", "Broken"),
    ]


# ---------------------------------------------------------------------------
# EVENT SOURCE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def events_by_year() -> Dict[int, List[Event]]:
    """Per-year payloads served by mock_source (empty unless a test fills it)."""
    return {}


@pytest.fixture
def mock_source(events_by_year: Dict[int, List[Event]]) -> MagicMock:
    """
    EventSource whose fetch is an AsyncMock.

    Returns events_by_year[year] (or []) for each requested year.
    """
    source = MagicMock(spec=EventSource)
    source.source_name = "mock"
    source.is_live = True

    async def fetch(year: int) -> List[Event]:
        return list(events_by_year.get(year, []))

    source.fetch_events_for_year = AsyncMock(side_effect=fetch)
    return source


@pytest.fixture
def state(now: datetime) -> CalendarState:
    return CalendarState.create(now)


# ---------------------------------------------------------------------------
# SESSION / CLIENT FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def session(clock: Callable[[], datetime]) -> CalendarSession:
    """Session without remote data, framed on the fixed date."""
    return CalendarSession(NullEventSource(), clock=clock)


@pytest.fixture
def client(session: CalendarSession) -> Generator[TestClient, None, None]:
    """
    Create a test client bound to the `session` fixture.

    Overrides the get_session dependency so no real event source is built.
    """
    app.dependency_overrides[get_session] = lambda: session

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
