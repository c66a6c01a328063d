"""
Week view layout - seven day columns on a shared hour grid.

Each column is laid out exactly like the day view; a column only receives
the events whose start falls on its date.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from campus_calendar.calendar.aggregator import events_on_day
from campus_calendar.calendar.layout.day import layout as day_layout
from campus_calendar.calendar.layout.timegrid import (
    HourWindow,
    as_date,
    days_between,
    now_indicator,
    position_in_window,
)
from campus_calendar.calendar.schemas import Event, PositionedEvent, WeekColumn, WeekLayout


def week_start(day: Union[date, datetime], first_weekday: int = 0) -> date:
    """First day of the week containing `day` (0 = Monday ... 6 = Sunday)."""
    day = as_date(day)
    return day - timedelta(days=(day.weekday() - first_weekday) % 7)


def week_frame(day: Union[date, datetime], first_weekday: int = 0):
    """(start, end) dates of the week containing `day`."""
    start = week_start(day, first_weekday)
    return start, start + timedelta(days=6)


def layout(
    events: Iterable[Event],
    frame_start: Union[date, datetime],
    frame_end: Union[date, datetime],
    window: Optional[HourWindow] = None,
) -> List[PositionedEvent]:
    """Position events column by column over the frame."""
    return day_layout(events, frame_start, frame_end, window)


def build_week_layout(
    events: Iterable[Event],
    reference: Union[date, datetime],
    selected: Optional[Union[date, datetime]] = None,
    window: Optional[HourWindow] = None,
    first_weekday: int = 0,
    now: Optional[datetime] = None,
) -> WeekLayout:
    """Build the week view for the week containing `reference`."""
    window = window or HourWindow()
    now = now or datetime.now()
    selected_day = as_date(selected) if selected else None
    start, end = week_frame(reference, first_weekday)
    events = list(events)

    columns = []
    for day in days_between(start, end):
        columns.append(
            WeekColumn(
                date=day,
                is_today=day == now.date(),
                is_selected=day == selected_day,
                events=position_in_window(events_on_day(events, day), day, window),
                now_indicator=now_indicator(now, day, window),
            )
        )

    return WeekLayout(start=start, end=end, hours=window.hours, days=columns)
