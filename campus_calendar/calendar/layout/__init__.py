"""
Per-view layout engines.

Each view module exposes the common contract

    layout(events, frame_start, frame_end) -> List[PositionedEvent]

plus a builder that produces the view's full layout tree:

- day:   build_day_layout    (hour grid + agenda)
- week:  build_week_layout   (seven hour-grid columns)
- month: build_month_layout  (whole-week grid with capped cells)
- year:  build_year_layout   (twelve month summaries)
"""

from campus_calendar.calendar.layout import day, month, week, year
from campus_calendar.calendar.layout.day import build_agenda, build_day_layout
from campus_calendar.calendar.layout.month import build_month_layout, month_frame
from campus_calendar.calendar.layout.timegrid import HourWindow
from campus_calendar.calendar.layout.week import build_week_layout, week_frame, week_start
from campus_calendar.calendar.layout.year import build_year_layout, year_frame

__all__ = [
    "day",
    "week",
    "month",
    "year",
    "HourWindow",
    "build_agenda",
    "build_day_layout",
    "build_week_layout",
    "build_month_layout",
    "build_year_layout",
    "week_start",
    "week_frame",
    "month_frame",
    "year_frame",
]
