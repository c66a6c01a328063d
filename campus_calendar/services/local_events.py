"""
Local event creation.

Events created in the running session (e.g. from the "add event" form)
never go through the event source. The request is validated here, at the
boundary, so the calendar core only ever receives well-formed events.
Local events are kept for the session only.
"""

import logging
import uuid
from datetime import datetime, time, timedelta
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from campus_calendar.calendar.categories import resolve_key
from campus_calendar.calendar.parser import format_clock
from campus_calendar.calendar.schemas import Event


logger = logging.getLogger("campus_calendar.services.local_events")


class LocalEventRequest(BaseModel):
    """
    Payload for creating a local event.

    Example:
        {"title": "Thesis defense", "dateISO": "2024-03-10",
         "timeHHmm": "14:30", "durationHours": 1.5, "category": "ACADEMIC"}
    """
    title: str = Field(..., min_length=1, max_length=200)
    date_iso: str = Field(..., alias="dateISO", description="YYYY-MM-DD")
    time_hhmm: str = Field(..., alias="timeHHmm", description="HH:mm, 24h")
    duration_hours: float = Field(..., alias="durationHours", gt=0, le=24)
    category: Optional[str] = Field(None, description="Category key, DEFAULT when unknown")
    location: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None)

    class Config:
        populate_by_name = True

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value

    @field_validator("date_iso")
    @classmethod
    def _check_date(cls, value: str) -> str:
        try:
            datetime.strptime(value, "%Y-%m-%d")
        except ValueError:
            raise ValueError("date must be YYYY-MM-DD")
        return value

    @field_validator("time_hhmm")
    @classmethod
    def _check_time(cls, value: str) -> str:
        try:
            datetime.strptime(value, "%H:%M")
        except ValueError:
            raise ValueError("time must be HH:mm")
        return value

    def start(self) -> datetime:
        hours, minutes = (int(part) for part in self.time_hhmm.split(":"))
        day = datetime.strptime(self.date_iso, "%Y-%m-%d").date()
        return datetime.combine(day, time(hours, minutes))


def create_local_event(request: LocalEventRequest) -> Event:
    """
    Build the Event for a validated request.

    The id is uuid4 based so it can never collide with source ids.
    """
    start = request.start()
    end = start + timedelta(hours=request.duration_hours)
    event = Event(
        id=f"local-{uuid.uuid4()}",
        title=request.title,
        date=request.date_iso,
        start_instant=start.isoformat(timespec="seconds"),
        end_instant=end.isoformat(timespec="seconds"),
        category=resolve_key(request.category),
        time=format_clock(start),
        location=request.location,
        description=request.description,
    )
    logger.info(f"Created local event {event.id} on {request.date_iso}")
    return event
