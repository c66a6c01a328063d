"""
Temporal Parser - Normalize date/time strings into local instants.

Events arrive with start/end values in several shapes: full instants with
or without seconds, date-only strings, date strings carrying a time suffix,
and occasionally US or European slash formats. Everything downstream
compares naive local datetimes, so this module is the only place that
turns strings into instants.

Instants are always built from explicit numeric components. A date-only
string means local midnight, never UTC midnight shifted into local time.

Unparseable input never raises: the parser returns None and logs a
diagnostic, and callers drop the event from layout.
"""

import logging
import re
from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Optional, Union

from campus_calendar.calendar.schemas import Event


logger = logging.getLogger("campus_calendar.calendar.parser")


DEFAULT_DURATION = timedelta(hours=1)

_INSTANT_SECONDS = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})")
_INSTANT_MINUTES = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})")
_DATE_ONLY = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

FALLBACK_FORMATS = ["%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y"]

Parseable = Union[str, date, datetime, None]


def _build(*parts: str) -> Optional[datetime]:
    try:
        return datetime(*(int(part) for part in parts))
    except ValueError:
        # Matched the shape but not the calendar (e.g. 2024-02-30)
        return None


def parse_instant(value: Parseable) -> Optional[datetime]:
    """
    Parse a date/time value into a naive local datetime.

    Recognized forms, in priority order:
        1. YYYY-MM-DDTHH:mm:ss
        2. YYYY-MM-DDTHH:mm
        3. YYYY-MM-DD prefix before a "T" (local midnight)
        4. YYYY-MM-DD (local midnight)
        5. YYYY-MM-DD, MM/DD/YYYY, DD/MM/YYYY via strptime

    Args:
        value: String to parse. datetime and date objects pass through
               (a date becomes midnight of that day).

    Returns:
        The parsed instant, or None if the value is unparseable
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    return _parse_text(value.strip())


@lru_cache(maxsize=1024)
def _parse_text(text: str) -> Optional[datetime]:
    # Cached per string, so an unparseable value is logged once
    match = _INSTANT_SECONDS.match(text)
    if match:
        parsed = _build(*match.groups())
        if parsed:
            return parsed

    match = _INSTANT_MINUTES.match(text)
    if match:
        parsed = _build(*match.groups())
        if parsed:
            return parsed

    if "T" in text:
        match = _DATE_ONLY.match(text.split("T", 1)[0])
        if match:
            parsed = _build(*match.groups())
            if parsed:
                return parsed

    match = _DATE_ONLY.match(text)
    if match:
        parsed = _build(*match.groups())
        if parsed:
            return parsed

    for fmt in FALLBACK_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return datetime(parsed.year, parsed.month, parsed.day)

    logger.warning(f"Unparseable date value: {text!r}")
    return None


def clear_parse_cache() -> None:
    """Forget cached parses (and which bad values were already logged)."""
    _parse_text.cache_clear()


# ---------------------------------------------------------------------------
# EVENT HELPERS
# ---------------------------------------------------------------------------


def event_start(event: Event) -> Optional[datetime]:
    """Start instant of an event, or None when it has no usable date."""
    return parse_instant(event.raw_start())


def event_end(event: Event, start: Optional[datetime] = None) -> Optional[datetime]:
    """
    End instant of an event for layout purposes.

    Falls back to one hour after the start when the end is missing,
    unparseable or not after the start. The stored event is not touched.
    """
    start = start or event_start(event)
    if start is None:
        return None
    end = parse_instant(event.end_instant) if event.end_instant else None
    if end is None or end <= start:
        return start + DEFAULT_DURATION
    return end


def same_day(left: Optional[datetime], right: Optional[Union[date, datetime]]) -> bool:
    """True when both values fall on the same calendar day."""
    if left is None or right is None:
        return False
    right_day = right.date() if isinstance(right, datetime) else right
    return left.date() == right_day


def date_key(value: Union[date, datetime]) -> str:
    """YYYY-MM-DD key used for grouping."""
    return value.strftime("%Y-%m-%d")


def format_clock(value: datetime) -> str:
    """Format a time as "9:30 AM"."""
    return value.strftime("%I:%M %p").lstrip("0")
