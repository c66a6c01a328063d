"""
Tests for local event creation.
"""

import pytest
from pydantic import ValidationError

from campus_calendar.calendar.parser import event_end, event_start
from campus_calendar.services.local_events import LocalEventRequest, create_local_event


def _request(**overrides) -> LocalEventRequest:
    payload = {
        "title": "Thesis defense",
        "dateISO": "2024-03-10",
        "timeHHmm": "14:30",
        "durationHours": 1.5,
        "category": "academic",
    }
    payload.update(overrides)
    return LocalEventRequest.model_validate(payload)


class TestLocalEventRequest:
    """Tests for request validation."""

    def test_accepts_alias_and_field_names(self):
        """Should accept both the wire names and the field names."""
        by_alias = _request()
        by_name = LocalEventRequest(
            title="Thesis defense",
            date_iso="2024-03-10",
            time_hhmm="14:30",
            duration_hours=1.5,
        )
        assert by_alias.date_iso == by_name.date_iso == "2024-03-10"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"durationHours": 0},
            {"durationHours": -1},
            {"dateISO": "2024-13-01"},
            {"dateISO": "10/03/2024"},
            {"timeHHmm": "25:00"},
            {"timeHHmm": "2pm"},
            {"title": "   "},
            {"title": ""},
        ],
    )
    def test_rejects_invalid_input(self, overrides):
        """Should raise ValidationError before anything is created."""
        with pytest.raises(ValidationError):
            _request(**overrides)


class TestCreateLocalEvent:
    """Tests for create_local_event."""

    def test_builds_event(self):
        """Should compute start, end, category and label."""
        event = create_local_event(_request())

        assert event.id.startswith("local-")
        assert event.title == "Thesis defense"
        assert event.date == "2024-03-10"
        assert event.start_instant == "2024-03-10T14:30:00"
        assert event.end_instant == "2024-03-10T16:00:00"
        assert event.category == "ACADEMIC"
        assert event.time == "2:30 PM"

    def test_parser_reads_created_event(self):
        """Should produce instants the temporal parser understands."""
        event = create_local_event(_request())
        start = event_start(event)

        assert (start.hour, start.minute) == (14, 30)
        assert (event_end(event, start) - start).total_seconds() == 90 * 60

    def test_unknown_category_defaults(self):
        assert create_local_event(_request(category="SPORTS")).category == "DEFAULT"

    def test_ids_are_unique(self):
        request = _request()
        assert create_local_event(request).id != create_local_event(request).id
