"""
Calendar Schemas - Data structures for events and view layouts.

These Pydantic models represent events as they arrive from the event
source (or from local creation) and the layout trees produced by the
per-view layout engines. Layout trees are plain data: they carry no
knowledge of the toolkit that eventually draws them.

Event payloads use the source's camelCase keys ("datetime",
"endDatetime", "isAllDay"); models accept both the alias and the field name.
"""

from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


ViewName = Literal["day", "week", "month", "year"]


# ---------------------------------------------------------------------------
# EVENTS
# ---------------------------------------------------------------------------


class Event(BaseModel):
    """
    A calendar event.

    `start_instant` may be a date-only string ("2024-03-10") or a full
    instant ("2024-03-10T09:00"); when it is missing, `date` is used as the
    start. `end_instant` is optional and defaults to one hour after the start
    wherever a duration is needed.
    """
    id: str = Field(..., description="Unique event identifier")
    title: str = Field("", description="Display title")
    date: Optional[str] = Field(None, description="YYYY-MM-DD, may carry a time suffix")
    start_instant: Optional[str] = Field(None, alias="datetime")
    end_instant: Optional[str] = Field(None, alias="endDatetime")
    category: Optional[str] = Field(None, description="Category registry key")

    # Display extras carried by the source
    time: Optional[str] = Field(None, description='Display label such as "All Day"')
    location: Optional[str] = Field(None)
    description: Optional[str] = Field(None)
    is_all_day: bool = Field(False, alias="isAllDay")

    class Config:
        populate_by_name = True

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Sources hand out numeric ids (e.g. 2024500)
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def get_display_title(self) -> str:
        """Get a display-friendly title (with fallback)."""
        return self.title or "(No title)"

    def raw_start(self) -> Optional[str]:
        """The string the start instant is parsed from."""
        return self.start_instant or self.date


class CategoryDescriptor(BaseModel):
    """Display metadata for an event category. Never affects layout."""
    key: str
    name: str
    short_name: str
    fill: str
    light_fill: str
    text: str
    border: str


# ---------------------------------------------------------------------------
# PLACEMENTS
# ---------------------------------------------------------------------------


class TimeSlot(BaseModel):
    """
    Vertical placement inside the visible hour window, in percent.

    `raw_top` / `raw_height` are the unclamped values straight from the
    minutes arithmetic; `top` / `height` are what gets drawn.
    """
    top: float
    height: float
    raw_top: float
    raw_height: float
    clipped_top: bool = False
    clipped_bottom: bool = False


class GridCell(BaseModel):
    """Position of an event chip inside a month grid."""
    row: int
    column: int
    index: int


class PositionedEvent(BaseModel):
    """An event plus where it goes on screen."""
    event: Event
    day: date
    start: datetime
    end: datetime
    category: CategoryDescriptor
    slot: Optional[TimeSlot] = None
    cell: Optional[GridCell] = None


# ---------------------------------------------------------------------------
# VIEW LAYOUTS
# ---------------------------------------------------------------------------


class AgendaItem(BaseModel):
    """One line of the day agenda list."""
    event: Event
    category: CategoryDescriptor
    start_label: str
    end_label: Optional[str] = None
    all_day: bool = False


class DayLayout(BaseModel):
    view: Literal["day"] = "day"
    date: date
    hours: List[int]
    events: List[PositionedEvent]
    agenda: List[AgendaItem]
    event_count: int
    now_indicator: Optional[float] = None


class WeekColumn(BaseModel):
    date: date
    is_today: bool = False
    is_selected: bool = False
    events: List[PositionedEvent]
    now_indicator: Optional[float] = None


class WeekLayout(BaseModel):
    view: Literal["week"] = "week"
    start: date
    end: date
    hours: List[int]
    days: List[WeekColumn]


class MonthCell(BaseModel):
    date: date
    in_month: bool
    is_today: bool = False
    is_selected: bool = False
    events: List[PositionedEvent]
    total: int
    overflow: int = 0
    overflow_label: Optional[str] = None


class MonthLayout(BaseModel):
    view: Literal["month"] = "month"
    year: int
    month: int
    start: date
    end: date
    weekday_labels: List[str]
    weeks: List[List[MonthCell]]


class DayChip(BaseModel):
    """Summary chip for one date in the year view."""
    day: int
    count: int
    category: CategoryDescriptor


class MonthSummary(BaseModel):
    month: int
    name: str
    is_current_month: bool = False
    event_count: int
    chips: List[DayChip]
    notable: List[PositionedEvent]
    overflow: int = 0
    overflow_label: Optional[str] = None


class YearLayout(BaseModel):
    view: Literal["year"] = "year"
    year: int
    months: List[MonthSummary]


ViewLayout = Union[DayLayout, WeekLayout, MonthLayout, YearLayout]


class CalendarLayout(BaseModel):
    """
    Full render tree for the active view.

    Produced by the render surface from the session state and the merged
    event list.
    """
    view: ViewName
    title: str
    reference_date: datetime
    selected_date: datetime
    loading: bool = False
    warnings: List[str] = Field(default_factory=list)
    # Agenda of the selected date, shown beside the week and month grids
    selected_agenda: List[AgendaItem] = Field(default_factory=list)
    body: ViewLayout = Field(..., discriminator="view")
