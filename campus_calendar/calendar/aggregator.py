"""
Event Aggregator - Grouping and sorting helpers shared by the views.

All functions are pure: they return new lists/dicts and never reorder or
mutate the list they are given. Events without a parseable start are left
out of every grouping.
"""

from collections import Counter
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple, Union

from campus_calendar.calendar.categories import category_order, resolve_key
from campus_calendar.calendar.parser import date_key, event_start
from campus_calendar.calendar.schemas import Event


def with_starts(events: Iterable[Event]) -> List[Tuple[Event, datetime]]:
    """Pair each event with its parsed start, dropping unparseable ones."""
    pairs = []
    for event in events:
        start = event_start(event)
        if start is not None:
            pairs.append((event, start))
    return pairs


def sort_by_start(events: Iterable[Event]) -> List[Event]:
    """
    Stable ascending sort by start instant.

    Events whose start cannot be parsed keep their encounter order and sort
    after the dated ones.
    """
    keyed = [(event_start(event), index, event) for index, event in enumerate(events)]
    keyed.sort(key=lambda item: (item[0] is None, item[0] or datetime.min, item[1]))
    return [event for _, _, event in keyed]


def group_by_date(events: Iterable[Event]) -> Dict[str, List[Event]]:
    """Group events by YYYY-MM-DD of their start, in encounter order."""
    grouped: Dict[str, List[Event]] = {}
    for event, start in with_starts(events):
        grouped.setdefault(date_key(start), []).append(event)
    return grouped


def group_by_month(events: Iterable[Event], year: int) -> Dict[int, List[Event]]:
    """
    Group the events of one calendar year by month (1-12).

    Every month key is present, empty months map to an empty list.
    """
    grouped: Dict[int, List[Event]] = {month: [] for month in range(1, 13)}
    for event, start in with_starts(events):
        if start.year == year:
            grouped[start.month].append(event)
    return grouped


def group_by_day_of_month(events: Iterable[Event]) -> Dict[int, List[Event]]:
    """Group events by day-of-month, keys in ascending order."""
    grouped: Dict[int, List[Event]] = {}
    for event, start in with_starts(events):
        grouped.setdefault(start.day, []).append(event)
    return dict(sorted(grouped.items()))


def events_on_day(events: Iterable[Event], day: Union[date, datetime]) -> List[Event]:
    """Events starting on `day`, sorted by start time (stable)."""
    target = day.date() if isinstance(day, datetime) else day
    matching = [event for event, start in with_starts(events) if start.date() == target]
    return sort_by_start(matching)


def predominant_category(events: Iterable[Event]) -> Optional[str]:
    """
    Category key with the highest count among `events`.

    Ties go to the category that comes first in registry order.
    """
    counts = Counter(resolve_key(event.category) for event in events)
    if not counts:
        return None
    order = {key: index for index, key in enumerate(category_order())}
    return min(counts, key=lambda key: (-counts[key], order[key]))
