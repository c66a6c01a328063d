"""
Tests for the month view layout.

March 2024 starts on a Friday and ends on a Sunday, so a Monday-first grid
runs Feb 26 - Mar 31 (five weeks).
"""

from datetime import date

from campus_calendar.calendar.layout import month
from campus_calendar.calendar.layout.month import (
    build_month_layout,
    month_frame,
    overflow_label,
    weekday_labels,
)


def _cell(layout, day):
    for row in layout.weeks:
        for cell in row:
            if cell.date == day:
                return cell
    raise AssertionError(f"{day} not in grid")


class TestMonthFrame:
    """Tests for month_frame and labels."""

    def test_monday_first(self):
        """Should cover whole weeks around the month."""
        assert month_frame(2024, 3) == (date(2024, 2, 26), date(2024, 3, 31))

    def test_sunday_first(self):
        """Should shift the grid for a Sunday first weekday."""
        assert month_frame(2024, 3, first_weekday=6) == (date(2024, 2, 25), date(2024, 4, 6))

    def test_weekday_labels_rotate(self):
        """Should start the header row at the first weekday."""
        assert weekday_labels()[0] == "MON"
        assert weekday_labels(6)[:2] == ["SUN", "MON"]

    def test_overflow_label(self):
        """Should only label hidden events."""
        assert overflow_label(2) == "+2 more"
        assert overflow_label(0) is None


class TestBuildMonthLayout:
    """Tests for build_month_layout."""

    def test_whole_weeks(self, now):
        """Should produce rows of exactly seven cells."""
        layout = build_month_layout([], now, now=now)

        assert layout.view == "month"
        assert (layout.year, layout.month) == (2024, 3)
        assert len(layout.weeks) == 5
        assert all(len(row) == 7 for row in layout.weeks)

    def test_cell_cap_and_overflow(self, event_factory, now):
        """Should show three chips and "+2 more" for five events."""
        events = [event_factory(str(i), f"2024-03-12T{8 + i:02d}:00") for i in range(5)]

        layout = build_month_layout(events, now, now=now)

        cell = _cell(layout, date(2024, 3, 12))
        assert len(cell.events) == 3
        assert cell.total == 5
        assert cell.overflow == 2
        assert cell.overflow_label == "+2 more"

    def test_adjacent_month_cells_receive_events(self, event_factory, now):
        """Should flag neighbouring-month cells but still fill them."""
        events = [event_factory("feb", "2024-02-27")]

        layout = build_month_layout(events, now, now=now)

        cell = _cell(layout, date(2024, 2, 27))
        assert cell.in_month is False
        assert [item.event.id for item in cell.events] == ["feb"]

    def test_today_and_selected_flags(self, now):
        """Should mark today and the selected day."""
        layout = build_month_layout([], now, selected=date(2024, 3, 12), now=now)

        assert _cell(layout, date(2024, 3, 10)).is_today is True
        assert _cell(layout, date(2024, 3, 12)).is_selected is True
        assert _cell(layout, date(2024, 3, 11)).is_today is False

    def test_configurable_limit(self, event_factory, now):
        """Should respect a custom chip limit."""
        events = [event_factory(str(i), "2024-03-12") for i in range(3)]

        layout = build_month_layout(events, now, limit=1, now=now)

        assert _cell(layout, date(2024, 3, 12)).overflow_label == "+2 more"

    def test_grid_cell_positions(self, event_factory):
        """Should give row/column relative to the frame start."""
        placed = month.layout(
            [event_factory("tue", "2024-03-12")],
            date(2024, 2, 26),
            date(2024, 3, 31),
        )

        [item] = placed
        assert (item.cell.row, item.cell.column, item.cell.index) == (2, 1, 0)
