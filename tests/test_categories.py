"""
Tests for the category registry.
"""

import pytest

from campus_calendar.calendar.categories import (
    DEFAULT_CATEGORY,
    EVENT_CATEGORIES,
    category_order,
    get_category,
    resolve_key,
)


class TestCategoryRegistry:
    """Tests for category lookups."""

    @pytest.mark.parametrize("key", ["ACADEMIC", "EXAM", "HOLIDAY", "NATIONAL", "FESTIVAL", "ADMINISTRATIVE"])
    def test_known_keys(self, key):
        """Should return the descriptor registered under the key."""
        assert get_category(key).key == key

    def test_lookup_is_case_insensitive(self):
        """Should match keys regardless of case and surrounding spaces."""
        assert get_category(" academic ").key == "ACADEMIC"

    @pytest.mark.parametrize("key", [None, "", "SPORTS", "unknown"])
    def test_unknown_falls_back_to_default(self, key):
        """Should never fail, returning DEFAULT for anything unknown."""
        assert get_category(key).key == DEFAULT_CATEGORY
        assert resolve_key(key) == DEFAULT_CATEGORY

    def test_registry_order(self):
        """Should list categories in a fixed order ending with DEFAULT."""
        order = category_order()
        assert order[0] == "ACADEMIC"
        assert order[-1] == DEFAULT_CATEGORY
        assert order.index("EXAM") < order.index("HOLIDAY")

    def test_descriptors_are_complete(self):
        """Should carry colors and labels for every category."""
        for key, descriptor in EVENT_CATEGORIES.items():
            assert descriptor.key == key
            assert descriptor.name
            assert descriptor.short_name
            assert descriptor.fill.startswith("#")
            assert descriptor.light_fill.startswith("#")
            assert descriptor.text.startswith("#")
            assert descriptor.border.startswith("#")
