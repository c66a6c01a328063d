"""
Tests for the calendar session and the render surface.

These tests verify:
- Navigation triggers loading of the newly relevant years
- Concurrent view switches are collapsed by the guard
- Local events show up immediately in every view
- Degraded-mode warnings and their dismissal
- Unparseable events never reach any view
"""

import asyncio
from datetime import date, datetime

import pytest

from campus_calendar.core.config import Settings
from campus_calendar.environments.base import NullEventSource
from campus_calendar.services.calendar_session import CalendarSession, layout_title, render_layout
from campus_calendar.services.calendar_state import CalendarNavigator, CalendarState, CalendarView
from campus_calendar.services.local_events import LocalEventRequest


# ---------------------------------------------------------------------------
# RENDER SURFACE TESTS
# ---------------------------------------------------------------------------

class TestRenderLayout:
    """Tests for render_layout / layout_title."""

    @pytest.mark.parametrize(
        "view, expected",
        [
            (CalendarView.DAY, "Sunday, March 10, 2024"),
            (CalendarView.WEEK, "Mar 04 - Mar 10, 2024"),
            (CalendarView.MONTH, "March 2024"),
            (CalendarView.YEAR, "2024"),
        ],
    )
    def test_titles(self, view, expected, now):
        assert layout_title(view, now) == expected

    @pytest.mark.parametrize("view", ["day", "week", "month", "year"])
    def test_body_matches_active_view(self, view, state, sample_events, now):
        """Should build the layout of the active view."""
        state.active_view = CalendarView(view)

        layout = render_layout(state, sample_events, Settings(), now)

        assert layout.view == view
        assert layout.body.view == view

    def test_settings_drive_layout(self, state, event_factory, now):
        """Should apply the configured cell limit and first weekday."""
        events = [event_factory(str(i), "2024-03-12") for i in range(3)]
        settings = Settings(MONTH_CELL_EVENT_LIMIT=2, WEEK_STARTS_ON=6)

        layout = render_layout(state, events, settings, now)

        assert layout.body.weekday_labels[0] == "SUN"
        cells = [cell for row in layout.body.weeks for cell in row if cell.date == date(2024, 3, 12)]
        assert cells[0].overflow_label == "+1 more"

    def test_layout_is_json_serializable(self, state, sample_events, now):
        """Should dump to JSON for the HTTP layer."""
        payload = render_layout(state, sample_events, Settings(), now).model_dump(mode="json")
        assert payload["title"] == "March 2024"
        assert payload["body"]["view"] == "month"

    def test_selected_agenda_in_month_view(self, state, sample_events, now):
        """Should list the selected date's events beside the month grid."""
        CalendarNavigator(state).select_day(date(2024, 3, 12))

        agenda = render_layout(state, sample_events, Settings(), now).selected_agenda

        assert [item.event.id for item in agenda] == ["board"]
        assert (agenda[0].start_label, agenda[0].end_label) == ("2:00 PM", "3:30 PM")

    def test_selected_agenda_in_week_view(self, state, sample_events, event_factory, now):
        """Should list the selected day's events sorted, with All Day labels."""
        state.active_view = CalendarView.WEEK
        state.selected_date = datetime(2024, 3, 25)
        events = sample_events + [event_factory("late", "2024-03-25T16:00", title="Colour Run")]

        agenda = render_layout(state, events, Settings(), now).selected_agenda

        assert [item.event.id for item in agenda] == ["holi", "late"]
        assert agenda[0].all_day is True
        assert agenda[0].start_label == "All Day"

    def test_selected_agenda_empty_day(self, state, sample_events, now):
        state.selected_date = datetime(2024, 3, 11)
        assert render_layout(state, sample_events, Settings(), now).selected_agenda == []


# ---------------------------------------------------------------------------
# SESSION TESTS
# ---------------------------------------------------------------------------

class TestCalendarSession:
    """Tests for CalendarSession."""

    @pytest.mark.asyncio
    async def test_refresh_loads_current_year(self, mock_source, clock):
        """Should fetch the reference year on first refresh."""
        session = CalendarSession(mock_source, clock=clock)

        await session.refresh()

        mock_source.fetch_events_for_year.assert_awaited_once_with(2024)

    @pytest.mark.asyncio
    async def test_switch_to_year_loads_neighbours(self, mock_source, clock):
        """Should load the adjacent years when the year view opens."""
        session = CalendarSession(mock_source, clock=clock)
        await session.refresh()

        assert await session.switch_view("year") is True

        assert session.state.loaded_years == {2023, 2024, 2025}

    @pytest.mark.asyncio
    async def test_concurrent_switches_collapse(self, session):
        """Should apply the first switch and ignore one issued meanwhile."""
        results = await asyncio.gather(session.switch_view("year"), session.switch_view("day"))

        assert results == [True, False]
        assert session.state.active_view == CalendarView.YEAR

    @pytest.mark.asyncio
    async def test_navigation_operations(self, session):
        """Should apply each transition through the session."""
        await session.next()
        assert session.state.reference_date.month == 4

        await session.previous()
        await session.previous()
        assert session.state.reference_date.month == 2

        await session.today()
        assert session.state.reference_date.month == 3

        assert await session.select_month(7) is True
        assert session.state.reference_date.month == 7

        await session.switch_view("week")
        assert await session.select_day(date(2024, 7, 3)) is True
        assert session.state.active_view == CalendarView.DAY

    @pytest.mark.asyncio
    async def test_january_month_loads_previous_year(self, mock_source, clock):
        """Should fetch December's year for a January grid."""
        session = CalendarSession(mock_source, clock=clock)
        await session.select_month(1)

        assert session.state.loaded_years == {2023, 2024}

    def test_local_event_visible_immediately(self, session, now):
        """Should show a created event without any fetch."""
        event = session.add_local_event(
            LocalEventRequest(title="Thesis defense", date_iso="2024-03-12", time_hhmm="14:30", duration_hours=1)
        )

        layout = session.layout()

        cells = [cell for row in layout.body.weeks for cell in row if cell.date == date(2024, 3, 12)]
        assert [item.event.id for item in cells[0].events] == [event.id]

    def test_sample_events_are_local(self, clock, sample_events):
        """Should seed sample events into the local list."""
        session = CalendarSession(NullEventSource(), clock=clock, sample_events=sample_events)
        assert len(session.state.local_events) == len(sample_events)

    def test_degraded_warning_recorded_once(self, clock):
        """Should surface why remote events are missing."""
        session = CalendarSession(NullEventSource(reason="Remote events are disabled."), clock=clock)

        assert session.layout().warnings == ["Remote events are disabled."]

    def test_no_warning_for_plain_null_source(self, session):
        assert session.layout().warnings == []

    def test_dismiss_warning(self, clock):
        """Should remove a warning by index."""
        session = CalendarSession(NullEventSource(reason="offline"), clock=clock)

        assert session.dismiss_warning(3) is False
        assert session.dismiss_warning(0) is True
        assert session.state.warnings == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("view", ["day", "week", "month", "year"])
    async def test_unparseable_event_never_rendered(self, view, clock, sample_events):
        """Should leave an event with a garbage date out of every view."""
        session = CalendarSession(NullEventSource(), clock=clock, sample_events=sample_events)
        await session.switch_view(view)

        dumped = session.layout().model_dump_json()

        assert '"broken"' not in dumped
        assert "Broken" not in dumped
