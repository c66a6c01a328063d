"""
Category Registry - Display metadata for event categories.

Categories drive colors and labels only; layout math never looks at them.
Lookups never fail: a missing or unknown key resolves to DEFAULT.

Registry order matters in one place: when two categories tie for the most
events on a date in the year view, the one listed first here wins.
"""

from typing import Dict, List, Optional

from campus_calendar.calendar.schemas import CategoryDescriptor


DEFAULT_CATEGORY = "DEFAULT"


def _descriptor(key: str, name: str, short_name: str, fill: str, light_fill: str, text: str, border: str) -> CategoryDescriptor:
    return CategoryDescriptor(
        key=key,
        name=name,
        short_name=short_name,
        fill=fill,
        light_fill=light_fill,
        text=text,
        border=border,
    )


EVENT_CATEGORIES: Dict[str, CategoryDescriptor] = {
    "ACADEMIC": _descriptor("ACADEMIC", "Academic", "Acad", "#2563eb", "#dbeafe", "#1e40af", "#3b82f6"),
    "EXAM": _descriptor("EXAM", "Examination", "Exam", "#dc2626", "#fee2e2", "#991b1b", "#ef4444"),
    "HOLIDAY": _descriptor("HOLIDAY", "Holiday", "Hol", "#16a34a", "#dcfce7", "#166534", "#22c55e"),
    "NATIONAL": _descriptor("NATIONAL", "National Holiday", "Natl", "#ea580c", "#ffedd5", "#9a3412", "#f97316"),
    "FESTIVAL": _descriptor("FESTIVAL", "Festival", "Fest", "#9333ea", "#f3e8ff", "#6b21a8", "#a855f7"),
    "ADMINISTRATIVE": _descriptor("ADMINISTRATIVE", "Administrative", "Admin", "#ca8a04", "#fef9c3", "#854d0e", "#eab308"),
    DEFAULT_CATEGORY: _descriptor(DEFAULT_CATEGORY, "Other", "Other", "#4b5563", "#f3f4f6", "#1f2937", "#6b7280"),
}


def resolve_key(key: Optional[str]) -> str:
    """Normalize a category key, falling back to DEFAULT."""
    if not key:
        return DEFAULT_CATEGORY
    normalized = str(key).strip().upper()
    return normalized if normalized in EVENT_CATEGORIES else DEFAULT_CATEGORY


def get_category(key: Optional[str]) -> CategoryDescriptor:
    """Get the descriptor for a category key (never raises)."""
    return EVENT_CATEGORIES[resolve_key(key)]


def category_order() -> List[str]:
    """Category keys in registry order."""
    return list(EVENT_CATEGORIES)
