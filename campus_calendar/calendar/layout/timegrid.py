"""
Hour window math shared by the day and week views.

An event's vertical position is a percentage of the visible window:

    top    = minutes from window start to event start / window minutes * 100
    height = event duration in minutes / window minutes * 100

The raw percentages are computed first and kept on the slot. The drawn
values come from a separate clamp step: the block is kept inside the
window and raised to a minimum height so short events stay clickable.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple, Union

from campus_calendar.calendar.categories import get_category
from campus_calendar.calendar.parser import event_end, event_start, same_day
from campus_calendar.calendar.schemas import Event, GridCell, PositionedEvent, TimeSlot
from campus_calendar.core.config import Settings


@dataclass(frozen=True)
class HourWindow:
    """Visible hour range of a time grid."""
    start_hour: int = 7
    end_hour: int = 20
    min_height: float = 5.0

    def __post_init__(self):
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(f"Invalid hour window {self.start_hour}-{self.end_hour}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "HourWindow":
        return cls(
            start_hour=settings.DAY_START_HOUR,
            end_hour=settings.DAY_END_HOUR,
            min_height=settings.MIN_EVENT_HEIGHT_PERCENT,
        )

    @property
    def total_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60

    @property
    def hours(self) -> List[int]:
        """Hour labels drawn down the side of the grid."""
        return list(range(self.start_hour, self.end_hour + 1))

    def window_start(self, day: date) -> datetime:
        return datetime(day.year, day.month, day.day, self.start_hour)

    def percent_of(self, moment: datetime, day: date) -> float:
        """Offset of `moment` from the window start of `day`, in percent."""
        minutes = (moment - self.window_start(day)).total_seconds() / 60
        return minutes / self.total_minutes * 100


def as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def raw_slot(start: datetime, end: datetime, window: HourWindow) -> Tuple[float, float]:
    """Unclamped (top, height) percentages for an event on its start day."""
    top = window.percent_of(start, start.date())
    height = (end - start).total_seconds() / 60 / window.total_minutes * 100
    return top, height


def clamp_slot(raw_top: float, raw_height: float, min_height: float) -> TimeSlot:
    """
    Fit a raw slot into the drawable window.

    The block starts no earlier than 0%, ends no later than 100% and is
    never shorter than `min_height`. Events running past either edge are
    truncated there rather than hidden.
    """
    top = max(0.0, raw_top)
    bottom = min(100.0, raw_top + raw_height)
    height = max(bottom - top, min_height)
    if top + height > 100.0:
        top = max(0.0, 100.0 - height)
    return TimeSlot(
        top=round(top, 4),
        height=round(height, 4),
        raw_top=raw_top,
        raw_height=raw_height,
        clipped_top=raw_top < 0,
        clipped_bottom=raw_top + raw_height > 100,
    )


def positioned(
    event: Event,
    start: datetime,
    end: datetime,
    slot: Optional[TimeSlot] = None,
    cell: Optional[GridCell] = None,
) -> PositionedEvent:
    """Wrap an event with its resolved times, category and placement."""
    return PositionedEvent(
        event=event,
        day=start.date(),
        start=start,
        end=end,
        category=get_category(event.category),
        slot=slot,
        cell=cell,
    )


def position_in_window(events: Iterable[Event], day: date, window: HourWindow) -> List[PositionedEvent]:
    """
    Place every event that starts on `day` inside the hour window.

    Events keep their order of appearance; unparseable ones are dropped.
    """
    placed = []
    for event in events:
        start = event_start(event)
        if not same_day(start, day):
            continue
        end = event_end(event, start)
        top, height = raw_slot(start, end, window)
        placed.append(positioned(event, start, end, slot=clamp_slot(top, height, window.min_height)))
    return placed


def now_indicator(now: datetime, day: date, window: HourWindow) -> Optional[float]:
    """Percent offset of the "now" line, or None when it is not on screen."""
    if not same_day(now, day):
        return None
    offset = window.percent_of(now, day)
    if offset < 0 or offset > 100:
        return None
    return round(offset, 4)


def days_between(frame_start: date, frame_end: date) -> List[date]:
    """Every day from frame_start to frame_end inclusive."""
    days = []
    cursor = frame_start
    while cursor <= frame_end:
        days.append(cursor)
        cursor += timedelta(days=1)
    return days
