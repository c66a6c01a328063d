"""
Event Loader - Year-scoped cache over an EventSource.

Events are fetched a whole calendar year at a time. The years a view can
show are derived from the active view and the reference date; any of them
not yet in `state.loaded_years` is fetched, concurrently, and merged into
`state.events` keyed by event id.

Rules:
======
- A year is only marked loaded after its fetch succeeds, so a failed year
  is retried on the next navigation.
- A year that is loaded, or currently being fetched, is never requested
  again.
- Results that arrive after the user has navigated away are still merged;
  the merge is idempotent so late arrivals are harmless.
- When nothing needs fetching `ensure_years` returns without awaiting.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Iterable, List, Set, Union

from campus_calendar.calendar.schemas import Event
from campus_calendar.environments.base import EventSource, EventSourceError
from campus_calendar.services.calendar_state import CalendarState, CalendarView


logger = logging.getLogger("campus_calendar.services.event_loader")


def relevant_years(view: Union[CalendarView, str], reference: Union[date, datetime]) -> Set[int]:
    """
    Years whose events the view framed on `reference` can display.

    Year view also needs the neighbouring years; a January or December
    month grid spills into the adjacent year.
    """
    view = CalendarView(view)
    year = reference.year
    years = {year}
    if view == CalendarView.YEAR:
        years.update({year - 1, year + 1})
    elif view == CalendarView.MONTH:
        if reference.month == 1:
            years.add(year - 1)
        elif reference.month == 12:
            years.add(year + 1)
    return years


def years_to_fetch(state: CalendarState) -> List[int]:
    """Relevant years that are neither loaded nor in flight, ascending."""
    wanted = relevant_years(state.active_view, state.reference_date)
    return sorted(wanted - state.loaded_years - state.pending_years)


def merge_events(existing: Iterable[Event], incoming: Iterable[Event]) -> List[Event]:
    """
    Union of two event lists keyed by id.

    Existing events win on id collisions and keep their order; new ids are
    appended in arrival order. Neither input is modified.
    """
    merged = list(existing)
    seen = {event.id for event in merged}
    for event in incoming:
        if event.id in seen:
            continue
        seen.add(event.id)
        merged.append(event)
    return merged


def failure_warning(year: int) -> str:
    return f"Could not load events for {year}. Showing the events already available."


class EventLoader:
    """
    Loads missing years from an EventSource into a CalendarState.

    Usage:
        loader = EventLoader(source)
        await loader.ensure_years(state)
    """

    def __init__(self, source: EventSource):
        self.source = source

    async def ensure_years(self, state: CalendarState) -> List[int]:
        """
        Fetch every relevant year that is not loaded yet.

        Returns:
            The years loaded by this call
        """
        missing = years_to_fetch(state)
        if not missing:
            return []

        logger.info(f"Loading events for years {missing} from {self.source.source_name}")
        # Claimed before the first await so a concurrent call skips them
        state.pending_years.update(missing)
        try:
            results = await asyncio.gather(
                *(self._load_year(state, year) for year in missing),
                return_exceptions=True,
            )
        finally:
            # Released even when cancelled before the fetches ran
            state.pending_years.difference_update(missing)
        return [year for year, loaded in zip(missing, results) if loaded is True]

    async def _load_year(self, state: CalendarState, year: int) -> bool:
        state.pending_years.add(year)
        state.loading += 1
        try:
            events = await self.source.fetch_events_for_year(year)
        except EventSourceError as e:
            logger.error(f"Failed to load events for {year}: {e}")
            state.add_warning(failure_warning(year))
            return False
        except Exception as e:
            logger.exception(f"Unexpected error loading events for {year}: {e}")
            state.add_warning(failure_warning(year))
            return False
        finally:
            state.pending_years.discard(year)
            state.loading -= 1

        state.events = merge_events(state.events, events)
        state.loaded_years.add(year)
        logger.info(f"Loaded {len(events)} events for {year}")
        return True
