"""
Calendar State - Session state and the navigation/view state machine.

CalendarState is created once per session and owns everything the views
need: the reference date (which day/week/month/year is framed), the
selected date, the active view, the years already fetched and the event
working set. Only the navigator below and the loader's merge step write
to it.

View switching:
===============
The navigator is always in one of two phases:

    IDLE ──begin_switch(view)──▶ TRANSITIONING ──complete_switch()──▶ IDLE

While TRANSITIONING every other switch or drill-down request is ignored,
so rapid repeated triggers cannot interleave. The guard drops back to IDLE
as soon as the active view has changed.

Next / previous:
================
    day   ±1 day    selected follows reference
    week  ±1 week   selected = first day of that week
    month ±1 month  selected = first day of that month
    year  ±1 year   selected = January 1st
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, List, Optional, Set, Union

from campus_calendar.calendar.layout.week import week_start
from campus_calendar.calendar.schemas import Event


logger = logging.getLogger("campus_calendar.services.calendar_state")


class CalendarView(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class TransitionPhase(str, Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"


@dataclass
class CalendarState:
    """
    Mutable state of one calendar session.

    `loaded_years` only ever grows. `events` holds the deduplicated union of
    every fetched year; `local_events` holds events created in this session
    (and any sample events) and is never deduplicated against fetches.
    """
    reference_date: datetime
    selected_date: datetime
    active_view: CalendarView = CalendarView.MONTH
    loaded_years: Set[int] = field(default_factory=set)
    pending_years: Set[int] = field(default_factory=set)
    events: List[Event] = field(default_factory=list)
    local_events: List[Event] = field(default_factory=list)
    phase: TransitionPhase = TransitionPhase.IDLE
    pending_view: Optional[CalendarView] = None
    warnings: List[str] = field(default_factory=list)
    loading: int = 0

    @classmethod
    def create(cls, now: Optional[datetime] = None) -> "CalendarState":
        """New session state framed on `now` in month view."""
        now = now or datetime.now()
        return cls(reference_date=now, selected_date=now)

    @property
    def is_loading(self) -> bool:
        return self.loading > 0

    def all_events(self) -> List[Event]:
        """Fetched events followed by local ones."""
        return self.events + self.local_events

    def add_warning(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)


# ---------------------------------------------------------------------------
# DATE ARITHMETIC
# ---------------------------------------------------------------------------


def start_of_day(value: Union[date, datetime]) -> datetime:
    return datetime(value.year, value.month, value.day)


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    years, month_index = divmod(value.month - 1 + months, 12)
    year = value.year + years
    month = month_index + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def add_years(value: datetime, years: int) -> datetime:
    return add_months(value, years * 12)


def first_of_month(value: Union[date, datetime]) -> datetime:
    return datetime(value.year, value.month, 1)


def same_month(left: Union[date, datetime], right: Union[date, datetime]) -> bool:
    return (left.year, left.month) == (right.year, right.month)


# ---------------------------------------------------------------------------
# STATE MACHINE
# ---------------------------------------------------------------------------


class CalendarNavigator:
    """
    Applies navigation transitions to a CalendarState.

    Every method is synchronous; reloading the years a transition makes
    relevant is the session's job.
    """

    def __init__(
        self,
        state: CalendarState,
        clock: Callable[[], datetime] = datetime.now,
        first_weekday: int = 0,
    ):
        self.state = state
        self.clock = clock
        self.first_weekday = first_weekday

    # -------------------------------------------------------------------------
    # VIEW SWITCHING
    # -------------------------------------------------------------------------

    @property
    def is_transitioning(self) -> bool:
        return self.state.phase == TransitionPhase.TRANSITIONING

    def begin_switch(self, view: Union[CalendarView, str]) -> bool:
        """
        Start switching to `view`.

        Returns:
            False if another switch is still being applied (request ignored)
        """
        view = CalendarView(view)
        if self.is_transitioning:
            logger.debug(f"Ignoring switch to {view.value}: transition in progress")
            return False
        self.state.phase = TransitionPhase.TRANSITIONING
        self.state.pending_view = view
        return True

    def complete_switch(self) -> CalendarView:
        """Apply the pending view and return to IDLE."""
        view = self.state.pending_view or self.state.active_view
        self._set_view(view)
        self.state.pending_view = None
        self.state.phase = TransitionPhase.IDLE
        return view

    def switch_view(self, view: Union[CalendarView, str]) -> bool:
        """Begin and complete a switch in one step."""
        if not self.begin_switch(view):
            return False
        self.complete_switch()
        return True

    def _set_view(self, view: CalendarView) -> None:
        if view == CalendarView.MONTH and not same_month(self.state.selected_date, self.state.reference_date):
            self.state.selected_date = first_of_month(self.state.reference_date)
        if view != self.state.active_view:
            logger.debug(f"View {self.state.active_view.value} -> {view.value}")
        self.state.active_view = view

    # -------------------------------------------------------------------------
    # NEXT / PREVIOUS / TODAY
    # -------------------------------------------------------------------------

    def step(self, direction: int) -> None:
        """Move one frame forward (direction > 0) or back (direction < 0)."""
        if direction == 0:
            return
        offset = 1 if direction > 0 else -1
        state = self.state
        view = state.active_view

        if view == CalendarView.DAY:
            state.reference_date = state.reference_date + timedelta(days=offset)
            state.selected_date = state.reference_date
        elif view == CalendarView.WEEK:
            state.reference_date = state.reference_date + timedelta(weeks=offset)
            state.selected_date = start_of_day(week_start(state.reference_date, self.first_weekday))
        elif view == CalendarView.MONTH:
            state.reference_date = add_months(state.reference_date, offset)
            state.selected_date = first_of_month(state.reference_date)
        else:
            state.reference_date = add_years(state.reference_date, offset)
            state.selected_date = datetime(state.reference_date.year, 1, 1)

    def next(self) -> None:
        self.step(1)

    def previous(self) -> None:
        self.step(-1)

    def jump_to_today(self) -> None:
        now = self.clock()
        self.state.reference_date = now
        self.state.selected_date = now

    # -------------------------------------------------------------------------
    # SELECTION / DRILL-DOWN
    # -------------------------------------------------------------------------

    def select_day(self, day: Union[date, datetime]) -> bool:
        """
        Focus a specific day.

        Month view reframes to the day's month when it belongs to an adjacent
        month; week view drills down to the day view on that day.

        Returns:
            False if ignored because a view switch is in progress
        """
        if self.is_transitioning:
            return False
        state = self.state
        selected = start_of_day(day)
        state.selected_date = selected

        if state.active_view == CalendarView.MONTH and not same_month(selected, state.reference_date):
            state.reference_date = selected
        elif state.active_view == CalendarView.WEEK:
            state.reference_date = selected
            state.active_view = CalendarView.DAY
        return True

    def select_month(self, month: int, year: Optional[int] = None) -> bool:
        """
        Drill down from the year view into one month.

        Returns:
            False if ignored because a view switch is in progress
        """
        if self.is_transitioning:
            return False
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month {month}")
        year = year or self.state.reference_date.year
        self.state.reference_date = datetime(year, month, 1)
        self._set_view(CalendarView.MONTH)
        return True
