"""
Event source selection.

The source is chosen once, when the session is built: the live holiday
source when it is enabled and can be constructed, otherwise the null
source. The calendar core only ever sees the EventSource interface.
"""

import logging

from campus_calendar.core.config import Settings
from campus_calendar.environments.base import (
    EventSource,
    EventSourceUnavailableError,
    NullEventSource,
)
from campus_calendar.environments.holidays import HolidayEventSource


logger = logging.getLogger("campus_calendar.environments")


def build_event_source(settings: Settings) -> EventSource:
    """
    Build the event source described by settings.

    Returns:
        HolidayEventSource, or NullEventSource (with a `reason`) when remote
        data is disabled or the live source cannot be configured
    """
    if not settings.EVENT_SOURCE_ENABLED:
        logger.info("Remote event source disabled, using local events only")
        return NullEventSource(reason="Remote events are disabled.")

    try:
        return create_live_source(settings)
    except EventSourceUnavailableError as e:
        logger.warning(f"Event source unavailable: {e}")
        return NullEventSource(reason=f"Remote events could not be loaded: {e}")


def create_live_source(settings: Settings) -> HolidayEventSource:
    """
    Construct the live holiday source.

    Raises:
        EventSourceUnavailableError: If the configuration cannot produce a source
    """
    base_url = (settings.HOLIDAY_API_BASE_URL or "").strip()
    country = (settings.HOLIDAY_COUNTRY_CODE or "").strip()
    if not base_url.startswith(("http://", "https://")):
        raise EventSourceUnavailableError(f"Invalid holiday API URL {base_url!r}")
    if len(country) != 2:
        raise EventSourceUnavailableError(f"Invalid country code {country!r}")

    return HolidayEventSource(
        base_url=base_url,
        country_code=country,
        timeout=settings.EVENT_SOURCE_TIMEOUT,
        include_academic=settings.INCLUDE_ACADEMIC_EVENTS,
    )
