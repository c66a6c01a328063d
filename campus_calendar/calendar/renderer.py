"""
Calendar HTML Renderer - Turn layout trees into display-ready HTML.

The renderer is the host adapter of the calendar: it receives a finished
CalendarLayout and draws it. It does no date math of its own; every
position, label and flag it prints was computed by the layout engines.

Design Goals:
=============
1. No JavaScript dependencies (pure HTML/CSS)
2. Absolute positioning from the layout's top/height percentages
3. Category colors straight from the category descriptors
4. Dark and light themes

Usage:
======
    from campus_calendar.calendar.renderer import CalendarRenderer

    renderer = CalendarRenderer(theme="light")
    html = renderer.render(session.layout())
"""

import html as html_escape
from typing import List

from campus_calendar.calendar.parser import format_clock
from campus_calendar.calendar.schemas import (
    AgendaItem,
    CalendarLayout,
    DayLayout,
    MonthCell,
    MonthLayout,
    MonthSummary,
    PositionedEvent,
    WeekColumn,
    WeekLayout,
    YearLayout,
)


def _hour_label(hour: int) -> str:
    suffix = "AM" if hour < 12 or hour == 24 else "PM"
    return f"{(hour % 12) or 12} {suffix}"


class CalendarRenderer:
    """
    Renders calendar layouts as HTML pages.

    Attributes:
        theme: Color theme ("dark" or "light")
        font_size: Base font size in pixels
        refresh_interval: Auto-refresh interval in seconds (0 = disabled)
    """

    def __init__(
        self,
        theme: str = "dark",
        font_size: int = 16,
        refresh_interval: int = 0,
    ):
        self.theme = theme
        self.font_size = font_size
        self.refresh_interval = refresh_interval

    def _get_css(self) -> str:
        """Generate CSS styles based on theme and settings."""
        if self.theme == "dark":
            bg_color = "#1a1a2e"
            text_color = "#eaeaea"
            accent_color = "#4a90d9"
            card_bg = "#16213e"
            muted_color = "#8a8a9a"
            border_color = "#2a2a4e"
        else:
            bg_color = "#f5f5f5"
            text_color = "#1a1a1a"
            accent_color = "#1976d2"
            card_bg = "#ffffff"
            muted_color = "#666666"
            border_color = "#e0e0e0"

        return f"""
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}

        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            font-size: {self.font_size}px;
            line-height: 1.4;
            background-color: {bg_color};
            color: {text_color};
            padding: 1.5rem;
        }}

        header {{
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin-bottom: 1rem;
            padding-bottom: 0.75rem;
            border-bottom: 2px solid {border_color};
        }}

        h1 {{ font-size: 1.8rem; font-weight: 600; color: {accent_color}; }}

        .loading {{ color: {muted_color}; font-size: 0.9rem; }}

        .warning {{
            background: #fff3cd;
            color: #664d03;
            border-radius: 6px;
            padding: 0.5rem 0.75rem;
            margin-bottom: 0.5rem;
            font-size: 0.9rem;
        }}

        .time-grid {{ display: flex; border: 1px solid {border_color}; background: {card_bg}; }}
        .hour-labels {{ width: 4rem; position: relative; height: 780px; }}
        .hour-label {{ position: absolute; right: 0.5rem; font-size: 0.75rem; color: {muted_color}; }}
        .grid-column {{ flex: 1; position: relative; height: 780px; border-left: 1px solid {border_color}; }}
        .grid-column.today {{ background: rgba(74, 144, 217, 0.08); }}
        .column-head {{ text-align: center; font-size: 0.8rem; color: {muted_color}; padding: 0.25rem; }}
        .now-line {{ position: absolute; left: 0; right: 0; border-top: 2px solid #ef5350; }}

        .event-block {{
            position: absolute;
            left: 4px;
            right: 4px;
            border-radius: 4px;
            border-left: 4px solid;
            padding: 2px 6px;
            overflow: hidden;
            font-size: 0.8rem;
        }}

        .agenda {{ margin-top: 1rem; display: flex; flex-direction: column; gap: 0.5rem; }}
        .agenda-item {{ display: flex; gap: 1rem; background: {card_bg}; border-radius: 8px; padding: 0.5rem 1rem; }}
        .agenda-time {{ min-width: 8rem; color: {accent_color}; font-weight: 600; }}
        .selected-agenda {{ margin-top: 1.5rem; }}
        .selected-agenda h2 {{ font-size: 1.1rem; color: {accent_color}; }}

        table.month {{ width: 100%; border-collapse: collapse; table-layout: fixed; }}
        table.month th {{ color: {muted_color}; font-size: 0.8rem; padding: 0.25rem; }}
        table.month td {{ border: 1px solid {border_color}; vertical-align: top; height: 6.5rem; padding: 0.25rem; background: {card_bg}; }}
        td.outside {{ opacity: 0.45; }}
        td.today .day-number {{ background: {accent_color}; color: white; border-radius: 50%; padding: 0 0.35rem; }}
        td.selected {{ outline: 2px solid {accent_color}; }}
        .chip {{ display: block; border-radius: 4px; padding: 0 4px; margin-top: 2px; font-size: 0.75rem; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }}
        .more {{ font-size: 0.75rem; color: {muted_color}; }}

        .year-grid {{ display: grid; grid-template-columns: repeat(4, 1fr); gap: 1rem; }}
        .month-card {{ background: {card_bg}; border-radius: 8px; padding: 0.75rem; border: 1px solid {border_color}; }}
        .month-card.current {{ border-color: {accent_color}; }}
        .month-card h2 {{ font-size: 1rem; margin-bottom: 0.5rem; }}
        .day-chips {{ display: flex; flex-wrap: wrap; gap: 3px; margin-bottom: 0.5rem; }}
        .day-chip {{ width: 1.6rem; text-align: center; border-radius: 4px; font-size: 0.7rem; color: white; }}

        .no-events {{ text-align: center; padding: 2rem; color: {muted_color}; }}
        """

    # -------------------------------------------------------------------------
    # SHARED PIECES
    # -------------------------------------------------------------------------

    def _chip(self, item: PositionedEvent) -> str:
        title = html_escape.escape(item.event.get_display_title())
        color = item.category
        return (
            f'<span class="chip" style="background:{color.light_fill};color:{color.text}" '
            f'title="{title}">{title}</span>'
        )

    def _event_block(self, item: PositionedEvent) -> str:
        slot = item.slot
        color = item.category
        title = html_escape.escape(item.event.get_display_title())
        time_str = format_clock(item.start)
        return (
            f'<div class="event-block" style="top:{slot.top}%;height:{slot.height}%;'
            f'background:{color.light_fill};color:{color.text};border-color:{color.border}">'
            f"<strong>{title}</strong><br>{time_str}</div>"
        )

    def _hour_labels(self, hours: List[int]) -> str:
        span = max(len(hours) - 1, 1)
        labels = "".join(
            f'<div class="hour-label" style="top:{index / span * 100:.4f}%">{_hour_label(hour)}</div>'
            for index, hour in enumerate(hours)
        )
        return f'<div class="hour-labels">{labels}</div>'

    def _column(self, events: List[PositionedEvent], now_indicator, css_class: str = "grid-column") -> str:
        blocks = "".join(self._event_block(item) for item in events if item.slot)
        now_line = f'<div class="now-line" style="top:{now_indicator}%"></div>' if now_indicator is not None else ""
        return f'<div class="{css_class}">{blocks}{now_line}</div>'

    # -------------------------------------------------------------------------
    # VIEWS
    # -------------------------------------------------------------------------

    def _render_agenda_item(self, item: AgendaItem) -> str:
        title = html_escape.escape(item.event.get_display_title())
        when = item.start_label if item.all_day else f"{item.start_label} - {item.end_label}"
        location = f" · {html_escape.escape(item.event.location)}" if item.event.location else ""
        return (
            f'<div class="agenda-item" style="border-left:4px solid {item.category.border}">'
            f'<span class="agenda-time">{when}</span><span>{title}{location}</span></div>'
        )

    def _render_agenda(self, items: List[AgendaItem]) -> str:
        if not items:
            return '<div class="agenda"><div class="no-events">No events scheduled for this day.</div></div>'
        return f'<div class="agenda">{"".join(self._render_agenda_item(item) for item in items)}</div>'

    def _render_selected_agenda(self, layout: CalendarLayout) -> str:
        if layout.view not in ("week", "month"):
            return ""
        heading = html_escape.escape(layout.selected_date.strftime("%A, %B %d"))
        return (
            f'<section class="selected-agenda"><h2>{heading}</h2>'
            f"{self._render_agenda(layout.selected_agenda)}</section>"
        )

    def _render_day(self, body: DayLayout) -> str:
        grid = self._hour_labels(body.hours) + self._column(body.events, body.now_indicator)
        return f'<div class="time-grid">{grid}</div>{self._render_agenda(body.agenda)}'

    def _render_week_column(self, column: WeekColumn) -> str:
        css_class = "grid-column today" if column.is_today else "grid-column"
        head = f'<div class="column-head">{column.date.strftime("%a %d")}</div>'
        return head + self._column(column.events, column.now_indicator, css_class)

    def _render_week(self, body: WeekLayout) -> str:
        columns = "".join(
            f'<div style="flex:1">{self._render_week_column(column)}</div>' for column in body.days
        )
        return f'<div class="time-grid">{self._hour_labels(body.hours)}{columns}</div>'

    def _render_month_cell(self, cell: MonthCell) -> str:
        classes = []
        if not cell.in_month:
            classes.append("outside")
        if cell.is_today:
            classes.append("today")
        if cell.is_selected:
            classes.append("selected")
        chips = "".join(self._chip(item) for item in cell.events)
        more = f'<span class="more">{cell.overflow_label}</span>' if cell.overflow_label else ""
        return (
            f'<td class="{" ".join(classes)}"><span class="day-number">{cell.date.day}</span>'
            f"{chips}{more}</td>"
        )

    def _render_month(self, body: MonthLayout) -> str:
        head = "".join(f"<th>{label}</th>" for label in body.weekday_labels)
        rows = "".join(
            "<tr>" + "".join(self._render_month_cell(cell) for cell in week) + "</tr>"
            for week in body.weeks
        )
        return f'<table class="month"><thead><tr>{head}</tr></thead><tbody>{rows}</tbody></table>'

    def _render_month_summary(self, summary: MonthSummary) -> str:
        chips = "".join(
            f'<span class="day-chip" style="background:{chip.category.fill}" '
            f'title="{chip.count} event(s)">{chip.day}</span>'
            for chip in summary.chips
        )
        notable = "".join(self._chip(item) for item in summary.notable)
        more = f'<span class="more">{summary.overflow_label}...</span>' if summary.overflow_label else ""
        css_class = "month-card current" if summary.is_current_month else "month-card"
        return (
            f'<div class="{css_class}"><h2>{summary.name}</h2>'
            f'<div class="day-chips">{chips}</div>{notable}{more}</div>'
        )

    def _render_year(self, body: YearLayout) -> str:
        cards = "".join(self._render_month_summary(summary) for summary in body.months)
        return f'<div class="year-grid">{cards}</div>'

    # -------------------------------------------------------------------------
    # PAGES
    # -------------------------------------------------------------------------

    def render_body(self, layout: CalendarLayout) -> str:
        """HTML fragment for the active view only."""
        body = layout.body
        if isinstance(body, DayLayout):
            return self._render_day(body)
        if isinstance(body, WeekLayout):
            return self._render_week(body)
        if isinstance(body, MonthLayout):
            return self._render_month(body)
        return self._render_year(body)

    def render(self, layout: CalendarLayout) -> str:
        """
        Render a layout as a complete HTML page.

        Args:
            layout: Output of the session's layout()

        Returns:
            Complete HTML page as a string
        """
        meta_refresh = ""
        if self.refresh_interval > 0:
            meta_refresh = f'<meta http-equiv="refresh" content="{self.refresh_interval}">'

        title = html_escape.escape(layout.title)
        warnings = "".join(
            f'<div class="warning">{html_escape.escape(message)}</div>' for message in layout.warnings
        )
        loading = '<span class="loading">Loading events...</span>' if layout.loading else ""

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    {meta_refresh}
    <title>{title}</title>
    <style>
    {self._get_css()}
    </style>
</head>
<body class="view-{layout.view}">
    <header>
        <h1>{title}</h1>
        {loading}
    </header>
    {warnings}
    {self.render_body(layout)}
    {self._render_selected_agenda(layout)}
</body>
</html>
"""

    def render_error(self, error_message: str, title: str = "Calendar Error") -> str:
        """Render an error page with a short retry hint."""
        safe_message = html_escape.escape(error_message)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta http-equiv="refresh" content="60">
    <title>{html_escape.escape(title)}</title>
    <style>
    {self._get_css()}
    .error-message {{ color: #ef5350; font-size: 1.2rem; margin: 1rem 0; }}
    </style>
</head>
<body>
    <h1>{html_escape.escape(title)}</h1>
    <p class="error-message">{safe_message}</p>
    <p class="loading">This page will automatically retry in 60 seconds.</p>
</body>
</html>
"""
