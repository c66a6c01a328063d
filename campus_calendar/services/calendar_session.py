"""
Calendar Session - State, loader and layout for one running calendar.

The session is the single entry point the HTTP layer talks to. Every
navigation operation follows the same shape:

    1. apply the transition to CalendarState (CalendarNavigator)
    2. await EventLoader.ensure_years for the newly relevant years
    3. the next layout() call renders from the updated state

Layout is always computed from the current state and the merged event
list (fetched events + local events); it never awaits and never fails,
at worst it renders an empty view.

Usage Example:
==============
    from campus_calendar.services.calendar_session import CalendarSession

    session = CalendarSession(source)
    await session.refresh()
    await session.switch_view("week")
    layout = session.layout()
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Union

from campus_calendar.calendar.layout import (
    HourWindow,
    build_agenda,
    build_day_layout,
    build_month_layout,
    build_week_layout,
    build_year_layout,
    week_frame,
)
from campus_calendar.calendar.schemas import CalendarLayout, Event
from campus_calendar.core.config import Settings, settings as default_settings
from campus_calendar.environments.base import EventSource
from campus_calendar.services.calendar_state import (
    CalendarNavigator,
    CalendarState,
    CalendarView,
)
from campus_calendar.services.event_loader import EventLoader
from campus_calendar.services.local_events import LocalEventRequest, create_local_event


logger = logging.getLogger("campus_calendar.services.calendar_session")


# ---------------------------------------------------------------------------
# RENDER SURFACE
# ---------------------------------------------------------------------------


def layout_title(view: CalendarView, reference: datetime, first_weekday: int = 0) -> str:
    """Header text for the framed period."""
    if view == CalendarView.DAY:
        return reference.strftime("%A, %B %d, %Y")
    if view == CalendarView.WEEK:
        start, end = week_frame(reference, first_weekday)
        return f"{start.strftime('%b %d')} - {end.strftime('%b %d, %Y')}"
    if view == CalendarView.MONTH:
        return reference.strftime("%B %Y")
    return str(reference.year)


def render_layout(
    state: CalendarState,
    events: Iterable[Event],
    settings: Settings = default_settings,
    now: Optional[datetime] = None,
) -> CalendarLayout:
    """
    Build the layout tree of the active view.

    Args:
        state: Current session state (read only)
        events: Events to show, fetched and local merged
        settings: Grid window, first weekday and summary limits
        now: Current instant for today / now-line markers

    Returns:
        CalendarLayout wrapping the active view's layout
    """
    now = now or datetime.now()
    events = list(events)
    view = state.active_view
    first_weekday = settings.WEEK_STARTS_ON

    if view == CalendarView.DAY:
        body = build_day_layout(events, state.reference_date, window=HourWindow.from_settings(settings), now=now)
    elif view == CalendarView.WEEK:
        body = build_week_layout(
            events,
            state.reference_date,
            selected=state.selected_date,
            window=HourWindow.from_settings(settings),
            first_weekday=first_weekday,
            now=now,
        )
    elif view == CalendarView.MONTH:
        body = build_month_layout(
            events,
            state.reference_date,
            selected=state.selected_date,
            first_weekday=first_weekday,
            limit=settings.MONTH_CELL_EVENT_LIMIT,
            now=now,
        )
    else:
        body = build_year_layout(events, state.reference_date, limit=settings.YEAR_NOTABLE_EVENT_LIMIT, now=now)

    return CalendarLayout(
        view=view.value,
        title=layout_title(view, state.reference_date, first_weekday),
        reference_date=state.reference_date,
        selected_date=state.selected_date,
        loading=state.is_loading,
        warnings=list(state.warnings),
        selected_agenda=build_agenda(events, state.selected_date),
        body=body,
    )


# ---------------------------------------------------------------------------
# SESSION
# ---------------------------------------------------------------------------


class CalendarSession:
    """
    One calendar as seen by one user.

    Attributes:
        source: Where yearly events come from (live or null)
        state: The session's CalendarState
        navigator: Transition logic over `state`
        loader: Year cache over `source`
    """

    def __init__(
        self,
        source: EventSource,
        settings: Settings = default_settings,
        clock: Callable[[], datetime] = datetime.now,
        sample_events: Optional[List[Event]] = None,
    ):
        """
        Initialize the session framed on today in month view.

        Args:
            source: Event source injected at construction
            settings: Application settings
            clock: Returns the current instant (tests pass a fixed one)
            sample_events: Events added as local events up front
        """
        self.source = source
        self.settings = settings
        self.clock = clock
        self.state = CalendarState.create(clock())
        self.navigator = CalendarNavigator(self.state, clock=clock, first_weekday=settings.WEEK_STARTS_ON)
        self.loader = EventLoader(source)

        if sample_events:
            self.state.local_events.extend(sample_events)

        reason = getattr(source, "reason", None)
        if not source.is_live and reason:
            self.state.add_warning(reason)

    async def refresh(self) -> List[int]:
        """Load whatever years the current frame needs."""
        return await self.loader.ensure_years(self.state)

    # -------------------------------------------------------------------------
    # NAVIGATION
    # -------------------------------------------------------------------------

    async def switch_view(self, view: Union[CalendarView, str]) -> bool:
        """
        Switch the active view.

        The switch is applied after yielding once to the event loop; a second
        switch requested in between is ignored.

        Returns:
            False if the request was ignored
        """
        if not self.navigator.begin_switch(view):
            return False
        try:
            await asyncio.sleep(0)
        finally:
            self.navigator.complete_switch()
        await self.refresh()
        return True

    async def step(self, direction: int) -> None:
        self.navigator.step(direction)
        await self.refresh()

    async def next(self) -> None:
        await self.step(1)

    async def previous(self) -> None:
        await self.step(-1)

    async def today(self) -> None:
        self.navigator.jump_to_today()
        await self.refresh()

    async def select_day(self, day: Union[date, datetime]) -> bool:
        applied = self.navigator.select_day(day)
        if applied:
            await self.refresh()
        return applied

    async def select_month(self, month: int, year: Optional[int] = None) -> bool:
        applied = self.navigator.select_month(month, year)
        if applied:
            await self.refresh()
        return applied

    # -------------------------------------------------------------------------
    # EVENTS AND WARNINGS
    # -------------------------------------------------------------------------

    def add_local_event(self, request: LocalEventRequest) -> Event:
        """Create a session-only event and show it immediately."""
        event = create_local_event(request)
        self.state.local_events.append(event)
        return event

    def dismiss_warning(self, index: int) -> bool:
        """Remove one warning; False when the index does not exist."""
        if not 0 <= index < len(self.state.warnings):
            return False
        self.state.warnings.pop(index)
        return True

    def layout(self, now: Optional[datetime] = None) -> CalendarLayout:
        return render_layout(self.state, self.state.all_events(), self.settings, now or self.clock())
