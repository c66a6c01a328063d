"""
Day view layout - a single day on the hour grid plus its agenda list.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from campus_calendar.calendar.aggregator import events_on_day
from campus_calendar.calendar.categories import get_category
from campus_calendar.calendar.layout.timegrid import (
    HourWindow,
    as_date,
    days_between,
    now_indicator,
    position_in_window,
)
from campus_calendar.calendar.parser import event_end, event_start, format_clock
from campus_calendar.calendar.schemas import AgendaItem, DayLayout, Event, PositionedEvent


ALL_DAY_LABEL = "All Day"


def layout(
    events: Iterable[Event],
    frame_start: Union[date, datetime],
    frame_end: Union[date, datetime],
    window: Optional[HourWindow] = None,
) -> List[PositionedEvent]:
    """Position the events of each day in the frame on the hour grid."""
    window = window or HourWindow()
    events = list(events)
    placed = []
    for day in days_between(as_date(frame_start), as_date(frame_end)):
        placed.extend(position_in_window(events_on_day(events, day), day, window))
    return placed


def is_all_day(event: Event) -> bool:
    return event.is_all_day or (event.time or "").strip().lower() == ALL_DAY_LABEL.lower()


def build_agenda(events: Iterable[Event], day: date) -> List[AgendaItem]:
    """Agenda lines for `day`, earliest first."""
    items = []
    for event in events_on_day(events, day):
        start = event_start(event)
        category = get_category(event.category)
        if is_all_day(event):
            items.append(AgendaItem(event=event, category=category, start_label=ALL_DAY_LABEL, all_day=True))
            continue
        items.append(
            AgendaItem(
                event=event,
                category=category,
                start_label=format_clock(start),
                end_label=format_clock(event_end(event, start)),
            )
        )
    return items


def build_day_layout(
    events: Iterable[Event],
    day: Union[date, datetime],
    window: Optional[HourWindow] = None,
    now: Optional[datetime] = None,
) -> DayLayout:
    """
    Build the day view.

    Args:
        events: Full event list (filtered to `day` here)
        day: The framed day
        window: Visible hour range
        now: Current instant for the "now" line

    Returns:
        DayLayout with positioned blocks, agenda and event count
    """
    window = window or HourWindow()
    day = as_date(day)
    now = now or datetime.now()
    events = list(events)

    placed = layout(events, day, day, window)
    return DayLayout(
        date=day,
        hours=window.hours,
        events=placed,
        agenda=build_agenda(events, day),
        event_count=len(placed),
        now_indicator=now_indicator(now, day, window),
    )
