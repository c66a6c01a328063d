"""
Fixed academic calendar and offline fallback data.

The academic year follows the same dates every year, so these events are
generated rather than fetched. `fallback_events` adds approximate festival
and national holiday dates and is used to seed the calendar when no live
source is available.
"""

from datetime import date, timedelta
from typing import List, Tuple

from campus_calendar.calendar.schemas import Event


ALL_DAY = "All Day"

# (title, MM-DD, category)
ACADEMIC_DATES: List[Tuple[str, str, str]] = [
    ("New Academic Year Begins", "07-01", "ACADEMIC"),
    ("Orientation Day", "07-03", "ACADEMIC"),
    ("Teachers Day", "09-05", "ACADEMIC"),
    ("Mid Term Exams Start", "09-20", "ACADEMIC"),
    ("Mid Term Exams End", "09-27", "ACADEMIC"),
    ("Summer Vacation Begins", "05-20", "ACADEMIC"),
    ("End Semester Exams Start", "12-01", "ACADEMIC"),
    ("End Semester Exams End", "12-15", "ACADEMIC"),
    ("Winter Break Begins", "12-16", "ACADEMIC"),
]

FIXED_HOLIDAYS: List[Tuple[str, str, str]] = [
    ("New Year", "01-01", "HOLIDAY"),
    ("Makar Sankranti", "01-14", "FESTIVAL"),
    ("Republic Day", "01-26", "NATIONAL"),
    ("Independence Day", "08-15", "NATIONAL"),
    ("Gandhi Jayanti", "10-02", "NATIONAL"),
    ("Christmas", "12-25", "HOLIDAY"),
]

# Lunar festivals, dated for LUNAR_BASE_YEAR and shifted approximately
LUNAR_BASE_YEAR = 2023
LUNAR_FESTIVALS: List[Tuple[str, str, str]] = [
    ("Diwali", "11-12", "FESTIVAL"),
    ("Holi", "03-08", "FESTIVAL"),
]


def all_day_event(event_id, title: str, day: str, category: str) -> Event:
    """Build an all-day event in the source's wire format."""
    return Event.model_validate(
        {
            "id": event_id,
            "title": title,
            "date": day,
            "time": ALL_DAY,
            "datetime": f"{day}T00:00",
            "endDatetime": f"{day}T23:59",
            "category": category,
            "isAllDay": True,
        }
    )


def academic_events(year: int) -> List[Event]:
    """University academic calendar for a year (ids year*1000+500+i)."""
    base_id = year * 1000 + 500
    return [
        all_day_event(base_id + index, title, f"{year}-{month_day}", category)
        for index, (title, month_day, category) in enumerate(ACADEMIC_DATES)
    ]


def _lunar_date(year: int, month_day: str) -> str:
    # Roughly 10.875 days earlier per year, wrapped to a month
    shift = int((year - LUNAR_BASE_YEAR) * 10.875) % 30
    base = date.fromisoformat(f"{year}-{month_day}")
    return (base - timedelta(days=shift)).isoformat()


def fallback_events(year: int) -> List[Event]:
    """Offline approximation of a year's holidays plus the academic calendar (ids year*1000+i)."""
    base_id = year * 1000
    entries = [(title, f"{year}-{month_day}", category) for title, month_day, category in FIXED_HOLIDAYS]
    entries += [(title, _lunar_date(year, month_day), category) for title, month_day, category in LUNAR_FESTIVALS]
    entries += [(title, f"{year}-{month_day}", category) for title, month_day, category in ACADEMIC_DATES]
    return [
        all_day_event(base_id + index, title, day, category)
        for index, (title, day, category) in enumerate(entries)
    ]
