"""
Year view layout - twelve month summaries.

Every month lists the dates that have events as colored chips (color of
the predominant category of that date) and surfaces a couple of notable
events by title with an overflow count.
"""

import calendar
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from campus_calendar.calendar.aggregator import (
    group_by_day_of_month,
    group_by_month,
    predominant_category,
    sort_by_start,
    with_starts,
)
from campus_calendar.calendar.categories import get_category
from campus_calendar.calendar.layout.month import overflow_label
from campus_calendar.calendar.layout.timegrid import as_date, positioned
from campus_calendar.calendar.parser import event_end
from campus_calendar.calendar.schemas import DayChip, Event, MonthSummary, PositionedEvent, YearLayout


def year_frame(year: int):
    return date(year, 1, 1), date(year, 12, 31)


def layout(
    events: Iterable[Event],
    frame_start: Union[date, datetime],
    frame_end: Union[date, datetime],
) -> List[PositionedEvent]:
    """Events starting inside the frame, in chronological order."""
    frame_start = as_date(frame_start)
    frame_end = as_date(frame_end)
    placed = []
    for event, start in with_starts(sort_by_start(events)):
        if frame_start <= start.date() <= frame_end:
            placed.append(positioned(event, start, event_end(event, start)))
    return placed


def summarize_month(
    year: int,
    month: int,
    month_events: List[Event],
    limit: int = 2,
    today: Optional[date] = None,
) -> MonthSummary:
    """Chips and notable events for one month."""
    chips = []
    for day, day_events in group_by_day_of_month(month_events).items():
        chips.append(
            DayChip(
                day=day,
                count=len(day_events),
                category=get_category(predominant_category(day_events)),
            )
        )

    ordered = layout(month_events, *_month_bounds(year, month))
    hidden = max(0, len(ordered) - limit)
    return MonthSummary(
        month=month,
        name=calendar.month_name[month],
        is_current_month=bool(today and today.year == year and today.month == month),
        event_count=len(ordered),
        chips=chips,
        notable=ordered[:limit],
        overflow=hidden,
        overflow_label=overflow_label(hidden),
    )


def _month_bounds(year: int, month: int):
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def build_year_layout(
    events: Iterable[Event],
    reference: Union[date, datetime],
    limit: int = 2,
    now: Optional[datetime] = None,
) -> YearLayout:
    """Build the year view for the year containing `reference`."""
    year = as_date(reference).year
    today = (now or datetime.now()).date()
    by_month = group_by_month(events, year)
    months = [
        summarize_month(year, month, by_month[month], limit=limit, today=today)
        for month in range(1, 13)
    ]
    return YearLayout(year=year, months=months)
