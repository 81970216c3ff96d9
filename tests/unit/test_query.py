"""
Unit tests for the filter and sort engine.
"""

from copy import deepcopy
from datetime import datetime

import pytest

from event_planner.core.query import EventQuery, apply_query, filter_events, sort_events
from event_planner.domain import Category, Priority, SortKey


def _titles(events):
    return [event.title for event in events]


class TestFiltering:
    """Tests for AND-combined filters and search."""

    def test_default_query_keeps_everything(self, sample_events):
        assert len(apply_query(sample_events, EventQuery())) == len(sample_events)

    def test_category_and_priority_combine(self, sample_events):
        query = EventQuery(category="work", priority="high")
        assert _titles(filter_events(sample_events, query)) == ["Team meeting"]

    def test_search_matches_title_or_description(self, sample_events):
        query = EventQuery(search="meet")
        assert set(_titles(filter_events(sample_events, query))) == {"Team meeting", "Dinner with family"}

    def test_search_combines_with_category(self, sample_events):
        query = EventQuery(category=Category.FAMILY, search="MEET")
        assert _titles(filter_events(sample_events, query)) == ["Dinner with family"]

    def test_completed_filter(self, sample_events):
        assert _titles(filter_events(sample_events, EventQuery(completed=True))) == ["Quarterly review"]
        assert len(filter_events(sample_events, EventQuery(completed=False))) == 4

    def test_unknown_filter_value_rejected(self):
        with pytest.raises(ValueError):
            EventQuery(category="hobby")
        with pytest.raises(ValueError):
            EventQuery(priority="critical")

    def test_query_is_idempotent(self, sample_events):
        query = EventQuery(category="work", sort_by=SortKey.PRIORITY)
        once = apply_query(sample_events, query)
        assert apply_query(once, query) == once

    def test_input_is_not_mutated(self, sample_events):
        before = deepcopy(sample_events)
        apply_query(sample_events, EventQuery(search="meet", sort_by="title"))
        assert sample_events == before

    def test_updated_returns_new_query(self):
        query = EventQuery()
        changed = query.updated(priority="urgent")

        assert query.priority == "all"
        assert changed.priority is Priority.URGENT


class TestSorting:
    """Tests for each sort key."""

    def test_date_ascending(self, sample_events):
        ordered = sort_events(sample_events, SortKey.DATE)
        assert [event.datetime for event in ordered] == sorted(event.datetime for event in sample_events)

    def test_priority_descending(self, sample_events):
        ordered = sort_events(sample_events, SortKey.PRIORITY)
        assert [event.priority for event in ordered] == [
            Priority.URGENT,
            Priority.HIGH,
            Priority.MEDIUM,
            Priority.MEDIUM,
            Priority.LOW,
        ]

    def test_priority_ties_keep_input_order(self, make_event):
        first = make_event("First", priority=Priority.MEDIUM)
        second = make_event("Second", priority=Priority.MEDIUM)
        low = make_event("Low", priority=Priority.LOW)

        assert _titles(sort_events([low, first, second], SortKey.PRIORITY)) == ["First", "Second", "Low"]
        assert _titles(sort_events([second, low, first], SortKey.PRIORITY)) == ["Second", "First", "Low"]

    def test_title_ignores_case(self, make_event):
        events = [make_event("banana"), make_event("Apple"), make_event("cherry")]
        assert _titles(sort_events(events, SortKey.TITLE)) == ["Apple", "banana", "cherry"]

    def test_category_ascending(self, sample_events):
        ordered = sort_events(sample_events, SortKey.CATEGORY)
        assert [event.category.value for event in ordered] == ["family", "health", "personal", "work", "work"]

    def test_same_instant_keeps_input_order(self, make_event):
        when = datetime(2024, 3, 5, 10, 0)
        events = [make_event("B", when), make_event("A", when)]
        assert _titles(sort_events(events, SortKey.DATE)) == ["B", "A"]
