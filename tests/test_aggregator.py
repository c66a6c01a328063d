"""
Tests for the event aggregator.

These tests verify:
- Stable sorting with unparseable events last
- Grouping by date, month and day of month
- Inputs are never mutated
- Predominant category and its tie-break
"""

from datetime import date

from campus_calendar.calendar.aggregator import (
    events_on_day,
    group_by_date,
    group_by_day_of_month,
    group_by_month,
    predominant_category,
    sort_by_start,
)


class TestSorting:
    """Tests for sort_by_start."""

    def test_stable_ascending_sort(self, event_factory):
        """Should sort by start and keep encounter order for ties."""
        a = event_factory("a", "2024-03-10T10:00")
        b = event_factory("b", "2024-03-10T09:00")
        c = event_factory("c", "2024-03-10T10:00")
        bad = event_factory("bad", "not-a-date")
        events = [a, bad, b, c]

        result = sort_by_start(events)

        assert [event.id for event in result] == ["b", "a", "c", "bad"]
        assert [event.id for event in events] == ["a", "bad", "b", "c"]


class TestGrouping:
    """Tests for the grouping helpers."""

    def test_group_by_date(self, event_factory):
        """Should key events by YYYY-MM-DD and drop unparseable ones."""
        events = [
            event_factory("1", "2024-03-10T09:00"),
            event_factory("2", "2024-03-11"),
            event_factory("3", "2024-03-10T18:00"),
            event_factory("4", "garbage"),
        ]

        grouped = group_by_date(events)

        assert set(grouped) == {"2024-03-10", "2024-03-11"}
        assert [event.id for event in grouped["2024-03-10"]] == ["1", "3"]

    def test_group_by_month_has_every_month(self, event_factory):
        """Should return twelve keys and only events of the given year."""
        events = [
            event_factory("jan", "2024-01-26"),
            event_factory("mar", "2024-03-10"),
            event_factory("next-year", "2025-03-10"),
        ]

        grouped = group_by_month(events, 2024)

        assert list(grouped) == list(range(1, 13))
        assert [event.id for event in grouped[1]] == ["jan"]
        assert [event.id for event in grouped[3]] == ["mar"]
        assert grouped[2] == []

    def test_group_by_day_of_month_sorted_keys(self, event_factory):
        """Should key by day number in ascending order."""
        events = [
            event_factory("late", "2024-03-25"),
            event_factory("early", "2024-03-05"),
            event_factory("early-2", "2024-03-05T12:00"),
        ]

        grouped = group_by_day_of_month(events)

        assert list(grouped) == [5, 25]
        assert len(grouped[5]) == 2

    def test_events_on_day_sorted(self, event_factory):
        """Should return only the day's events ordered by start."""
        events = [
            event_factory("afternoon", "2024-03-10T14:00"),
            event_factory("other-day", "2024-03-11T08:00"),
            event_factory("morning", "2024-03-10T08:00"),
        ]

        result = events_on_day(events, date(2024, 3, 10))

        assert [event.id for event in result] == ["morning", "afternoon"]


class TestPredominantCategory:
    """Tests for predominant_category."""

    def test_highest_count_wins(self, event_factory):
        """Should pick the most frequent category."""
        events = [
            event_factory("1", "2024-03-10", category="HOLIDAY"),
            event_factory("2", "2024-03-10", category="ACADEMIC"),
            event_factory("3", "2024-03-10", category="HOLIDAY"),
        ]
        assert predominant_category(events) == "HOLIDAY"

    def test_tie_broken_by_registry_order(self, event_factory):
        """Should prefer the category listed first in the registry."""
        events = [
            event_factory("1", "2024-03-10", category="HOLIDAY"),
            event_factory("2", "2024-03-10", category="EXAM"),
        ]
        assert predominant_category(events) == "EXAM"

    def test_unknown_categories_count_as_default(self, event_factory):
        """Should fold unknown keys into DEFAULT."""
        events = [
            event_factory("1", "2024-03-10", category="SPORTS"),
            event_factory("2", "2024-03-10", category=None),
            event_factory("3", "2024-03-10", category="ACADEMIC"),
        ]
        assert predominant_category(events) == "DEFAULT"

    def test_empty(self):
        """Should return None for no events."""
        assert predominant_category([]) is None
