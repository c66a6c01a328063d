"""
Calendar Router - HTTP surface of the calendar session.

All routes act on one in-process CalendarSession. Navigation routes apply
the transition, wait for any newly relevant years to load and answer with
the fresh layout, so a client can redraw from the response alone.

Endpoints:
==========
- GET    /calendar                   → HTML page of the active view
- GET    /calendar/layout            → Layout tree as JSON
- POST   /calendar/view              → Switch view {"view": "week"}
- POST   /calendar/navigate          → Next / previous {"direction": 1}
- POST   /calendar/today             → Jump to today
- POST   /calendar/select-day        → Focus a day {"date": "2024-03-10"}
- POST   /calendar/select-month      → Year → month drill-down {"year": 2024, "month": 3}
- POST   /calendar/events            → Add a local event (session only)
- DELETE /calendar/warnings/{index}  → Dismiss a warning
"""

import logging
from datetime import date, datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from campus_calendar.calendar.renderer import CalendarRenderer
from campus_calendar.calendar.schemas import CalendarLayout, Event, ViewName
from campus_calendar.core.config import settings
from campus_calendar.environments import build_event_source
from campus_calendar.environments.holidays import fallback_events
from campus_calendar.services.calendar_session import CalendarSession
from campus_calendar.services.local_events import LocalEventRequest


logger = logging.getLogger("campus_calendar.routers.calendar")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/calendar", tags=["calendar"])


# ---------------------------------------------------------------------------
# SESSION DEPENDENCY
# ---------------------------------------------------------------------------
_session: Optional[CalendarSession] = None


def create_session() -> CalendarSession:
    """
    Build a session from settings.

    Without a live source the current year's offline calendar is shown as
    local events so the page is not empty.
    """
    source = build_event_source(settings)
    sample = None if source.is_live else fallback_events(datetime.now().year)
    logger.info(f"Starting calendar session with source '{source.source_name}'")
    return CalendarSession(source, settings=settings, sample_events=sample)


async def get_session() -> CalendarSession:
    """FastAPI dependency returning the shared session."""
    global _session
    if _session is None:
        _session = create_session()
    return _session


def reset_session() -> None:
    """Drop the shared session; the next request builds a new one."""
    global _session
    _session = None


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS
# ---------------------------------------------------------------------------


class ViewRequest(BaseModel):
    view: ViewName


class NavigateRequest(BaseModel):
    direction: Literal[-1, 1] = Field(..., description="1 = next, -1 = previous")


class SelectDayRequest(BaseModel):
    date: date


class SelectMonthRequest(BaseModel):
    month: int = Field(..., ge=1, le=12)
    year: Optional[int] = Field(None, ge=1, le=9999)


# ---------------------------------------------------------------------------
# VIEW ENDPOINTS
# ---------------------------------------------------------------------------


@router.get("", response_class=HTMLResponse)
async def get_calendar_html(
    theme: str = Query("dark", pattern="^(dark|light)$"),
    session: CalendarSession = Depends(get_session),
):
    """Render the active view as a complete HTML page."""
    renderer = CalendarRenderer(theme=theme)
    try:
        await session.refresh()
        html = renderer.render(session.layout())
    except Exception as e:
        logger.error(f"Failed to render calendar: {e}", exc_info=True)
        html = renderer.render_error("The calendar could not be displayed.")
        return HTMLResponse(content=html, status_code=500)
    return HTMLResponse(content=html, status_code=200)


@router.get("/layout", response_model=CalendarLayout)
async def get_layout(session: CalendarSession = Depends(get_session)):
    """Layout tree of the active view."""
    await session.refresh()
    return session.layout()


# ---------------------------------------------------------------------------
# NAVIGATION ENDPOINTS
# ---------------------------------------------------------------------------


@router.post("/view", response_model=CalendarLayout)
async def switch_view(payload: ViewRequest, session: CalendarSession = Depends(get_session)):
    if not await session.switch_view(payload.view):
        logger.info(f"View switch to {payload.view} ignored, transition in progress")
    return session.layout()


@router.post("/navigate", response_model=CalendarLayout)
async def navigate(payload: NavigateRequest, session: CalendarSession = Depends(get_session)):
    await session.step(payload.direction)
    return session.layout()


@router.post("/today", response_model=CalendarLayout)
async def jump_to_today(session: CalendarSession = Depends(get_session)):
    await session.today()
    return session.layout()


@router.post("/select-day", response_model=CalendarLayout)
async def select_day(payload: SelectDayRequest, session: CalendarSession = Depends(get_session)):
    await session.select_day(payload.date)
    return session.layout()


@router.post("/select-month", response_model=CalendarLayout)
async def select_month(payload: SelectMonthRequest, session: CalendarSession = Depends(get_session)):
    await session.select_month(payload.month, payload.year)
    return session.layout()


# ---------------------------------------------------------------------------
# EVENTS AND WARNINGS
# ---------------------------------------------------------------------------


@router.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
async def add_local_event(payload: LocalEventRequest, session: CalendarSession = Depends(get_session)):
    """
    Add an event for this session only.

    Invalid payloads are rejected with 422 before reaching the session.
    """
    return session.add_local_event(payload)


@router.delete("/warnings/{index}")
async def dismiss_warning(index: int, session: CalendarSession = Depends(get_session)):
    if not session.dismiss_warning(index):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No warning at index {index}",
        )
    return {"warnings": session.state.warnings}
