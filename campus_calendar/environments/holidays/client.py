"""
Holiday Event Source - Fetch a year of public holidays over HTTP.

This source queries a Nager.Date compatible API for the public holidays of
one country and year, converts them into calendar events and appends the
fixed academic calendar for that year.

API Reference:
==============
- GET {base_url}/PublicHolidays/{year}/{countryCode}
  https://date.nager.at/Api

Usage Example:
==============
    from campus_calendar.environments.holidays import HolidayEventSource

    source = HolidayEventSource(country_code="IN")
    events = await source.fetch_events_for_year(2024)
"""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from campus_calendar.calendar.schemas import Event
from campus_calendar.environments.base import EventSource, EventSourceError
from campus_calendar.environments.holidays.academic import academic_events, all_day_event
from campus_calendar.environments.holidays.schemas import PublicHoliday


logger = logging.getLogger("campus_calendar.environments.holidays")


class HolidayEventSource(EventSource):
    """
    Public holiday event source.

    Holidays observed nationwide become NATIONAL events, regional ones
    HOLIDAY events. Event ids are "holiday-{year}-{index}", stable for a
    given API response.

    Attributes:
        base_url: API root, e.g. "https://date.nager.at/api/v3"
        country_code: ISO 3166-1 alpha-2 country code
        timeout: Request timeout in seconds
        include_academic: Append the academic calendar to every year
    """

    source_name = "holidays"

    def __init__(
        self,
        base_url: str = "https://date.nager.at/api/v3",
        country_code: str = "IN",
        timeout: float = 10.0,
        include_academic: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the holiday source.

        Args:
            base_url: API root without trailing slash
            country_code: Country whose holidays are fetched
            timeout: Request timeout in seconds
            include_academic: Add the fixed academic events to each year
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.country_code = country_code.upper()
        self.timeout = timeout
        self.include_academic = include_academic
        self._transport = transport

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        return {"Accept": "application/json"}

    async def _make_request(self, endpoint: str, year: int) -> list:
        """
        GET an endpoint and return the parsed JSON list.

        Raises:
            EventSourceError: On network errors, non-200 responses or
                              a payload that is not a list
        """
        url = f"{self.base_url}{endpoint}"

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.get(url, headers=self._get_headers())
            except httpx.RequestError as e:
                logger.error(f"Network error fetching holidays for {year}: {e}")
                raise EventSourceError(f"Network error: {e}", year=year)

        if response.status_code != 200:
            logger.error(f"Holiday API error for {year}: {response.status_code} - {response.text}")
            raise EventSourceError(
                f"Holiday API request failed with status {response.status_code}",
                year=year,
                status_code=response.status_code,
                response=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise EventSourceError(f"Invalid JSON from holiday API: {e}", year=year)

        if not isinstance(payload, list):
            raise EventSourceError("Unexpected holiday API payload", year=year, response=payload)
        return payload

    # -------------------------------------------------------------------------
    # EVENTS
    # -------------------------------------------------------------------------

    async def fetch_public_holidays(self, year: int) -> List[Event]:
        """Fetch and convert the public holidays of one year."""
        logger.info("Fetching public holidays", extra={"year": year, "country": self.country_code})

        payload = await self._make_request(f"/PublicHolidays/{year}/{self.country_code}", year)

        events = []
        for index, item in enumerate(payload):
            try:
                holiday = PublicHoliday.model_validate(item)
            except ValidationError as e:
                logger.warning(f"Skipping malformed holiday entry {index} for {year}: {e}")
                continue
            category = "NATIONAL" if holiday.global_ else "HOLIDAY"
            events.append(all_day_event(f"holiday-{year}-{index}", holiday.name, holiday.date, category))

        logger.info(f"Fetched {len(events)} public holidays for {year}")
        return events

    async def fetch_events_for_year(self, year: int) -> List[Event]:
        events = await self.fetch_public_holidays(year)
        if self.include_academic:
            events.extend(academic_events(year))
        return events
