"""
Month view layout - a grid of whole weeks around one month.

The grid runs from the week-aligned start on or before the 1st to the
week-aligned end on or after the last day of the month, so it always
holds a whole number of weeks. Cells from the neighbouring months are
flagged as such but still receive their events.

Each cell shows a capped number of event chips and an overflow label
("+2 more") for the rest.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from campus_calendar.calendar.aggregator import group_by_date
from campus_calendar.calendar.layout.timegrid import as_date, days_between, positioned
from campus_calendar.calendar.layout.week import week_start
from campus_calendar.calendar.parser import date_key, event_end, event_start
from campus_calendar.calendar.schemas import Event, GridCell, MonthCell, MonthLayout, PositionedEvent


WEEKDAY_LABELS = ["MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"]


def month_frame(year: int, month: int, first_weekday: int = 0):
    """(first cell, last cell) dates of the grid for a month."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    start = week_start(first, first_weekday)
    end = week_start(last, first_weekday) + timedelta(days=6)
    return start, end


def weekday_labels(first_weekday: int = 0) -> List[str]:
    return WEEKDAY_LABELS[first_weekday:] + WEEKDAY_LABELS[:first_weekday]


def overflow_label(hidden: int) -> Optional[str]:
    return f"+{hidden} more" if hidden > 0 else None


def layout(
    events: Iterable[Event],
    frame_start: Union[date, datetime],
    frame_end: Union[date, datetime],
) -> List[PositionedEvent]:
    """
    Place every event of the frame in its grid cell.

    Row/column are relative to `frame_start`; `index` is the event's order
    within its cell.
    """
    frame_start = as_date(frame_start)
    frame_end = as_date(frame_end)
    grouped = group_by_date(events)

    placed = []
    for offset, day in enumerate(days_between(frame_start, frame_end)):
        for index, event in enumerate(grouped.get(date_key(day), [])):
            start = event_start(event)
            cell = GridCell(row=offset // 7, column=offset % 7, index=index)
            placed.append(positioned(event, start, event_end(event, start), cell=cell))
    return placed


def build_month_layout(
    events: Iterable[Event],
    reference: Union[date, datetime],
    selected: Optional[Union[date, datetime]] = None,
    first_weekday: int = 0,
    limit: int = 3,
    now: Optional[datetime] = None,
) -> MonthLayout:
    """
    Build the month view for the month containing `reference`.

    Args:
        events: Full event list
        reference: Any day of the framed month
        selected: Focused day, highlighted in the grid
        first_weekday: First grid column (0 = Monday)
        limit: Chips shown per cell before the overflow label
        now: Current instant for today highlighting

    Returns:
        MonthLayout with rows of seven cells
    """
    reference = as_date(reference)
    selected_day = as_date(selected) if selected else None
    today = (now or datetime.now()).date()
    start, end = month_frame(reference.year, reference.month, first_weekday)

    by_day = {}
    for item in layout(events, start, end):
        by_day.setdefault(item.day, []).append(item)

    weeks: List[List[MonthCell]] = []
    for day in days_between(start, end):
        if day.weekday() == first_weekday:
            weeks.append([])
        day_events = by_day.get(day, [])
        hidden = max(0, len(day_events) - limit)
        weeks[-1].append(
            MonthCell(
                date=day,
                in_month=day.month == reference.month,
                is_today=day == today,
                is_selected=day == selected_day,
                events=day_events[:limit],
                total=len(day_events),
                overflow=hidden,
                overflow_label=overflow_label(hidden),
            )
        )

    return MonthLayout(
        year=reference.year,
        month=reference.month,
        start=start,
        end=end,
        weekday_labels=weekday_labels(first_weekday),
        weeks=weeks,
    )
