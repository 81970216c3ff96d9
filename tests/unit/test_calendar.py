"""
Unit tests for the month grid projection.
"""

from datetime import date, datetime

import pytest

from event_planner.core.calendar import (
    CalendarCell,
    events_on,
    is_selected,
    is_today,
    leading_blanks,
    month_grid,
    month_title,
    shift_month,
)


class TestMonthGrid:
    """Tests for grid layout and day bucketing."""

    @pytest.mark.parametrize(
        "reference, blanks",
        [
            (date(2024, 5, 1), 3),  # Wednesday
            (date(2024, 9, 1), 0),  # Sunday
            (date(2024, 6, 1), 6),  # Saturday
            (date(2024, 4, 1), 1),  # Monday
        ],
    )
    def test_leading_blanks(self, reference, blanks):
        assert leading_blanks(reference) == blanks

    def test_grid_shape(self):
        grid = month_grid(date(2024, 5, 20), [])

        assert grid[:3] == [None, None, None]
        assert len(grid) == 3 + 31
        assert grid[3].day == 1
        assert grid[-1].date == date(2024, 5, 31)

    def test_leap_february(self):
        grid = month_grid(date(2024, 2, 1), [])
        assert [cell for cell in grid if cell is not None][-1].day == 29

    def test_event_lands_on_its_day_regardless_of_time(self, make_event):
        late = make_event("Late", datetime(2024, 5, 15, 23, 59))
        early = make_event("Early", datetime(2024, 5, 15, 0, 0))
        grid = month_grid(date(2024, 5, 1), [late, early])

        cell = grid[3 + 14]
        assert cell.day == 15
        assert [event.title for event in cell.events] == ["Early", "Late"]
        assert sum(len(cell.events) for cell in grid if cell is not None) == 2

    def test_other_months_excluded(self, make_event):
        events = [make_event("April", datetime(2024, 4, 30, 12)), make_event("June", datetime(2024, 6, 1, 8))]
        grid = month_grid(date(2024, 5, 1), events)
        assert all(not cell.events for cell in grid if cell is not None)

    def test_events_on_sorted_by_time(self, make_event):
        events = [
            make_event("Evening", datetime(2024, 5, 15, 19)),
            make_event("Morning", datetime(2024, 5, 15, 8)),
            make_event("Other day", datetime(2024, 5, 16, 8)),
        ]
        assert [event.title for event in events_on(date(2024, 5, 15), events)] == ["Morning", "Evening"]


class TestCellPreview:
    """Tests for per-day preview truncation."""

    def test_overflow_count(self, make_event):
        cell = CalendarCell(day=1, date=date(2024, 5, 1), events=[make_event(str(i)) for i in range(5)])
        shown, overflow = cell.preview()

        assert len(shown) == 3
        assert overflow == 2

    def test_no_overflow(self, make_event):
        cell = CalendarCell(day=1, date=date(2024, 5, 1), events=[make_event("Only")])
        assert cell.preview() == ([cell.events[0]], 0)


class TestNavigation:
    """Tests for month shifting and highlighting."""

    def test_shift_forward_from_month_end(self):
        assert shift_month(date(2024, 1, 31), 1) == date(2024, 2, 1)

    def test_shift_back_across_year(self):
        assert shift_month(date(2024, 1, 15), -1) == date(2023, 12, 1)

    def test_shift_full_year(self):
        assert shift_month(date(2024, 5, 1), 12) == date(2025, 5, 1)

    def test_highlights(self):
        assert is_today(date(2024, 5, 1), today=date(2024, 5, 1))
        assert not is_today(date(2024, 5, 2), today=date(2024, 5, 1))
        assert is_selected(date(2024, 5, 2), date(2024, 5, 2))
        assert not is_selected(date(2024, 5, 2), None)

    def test_month_title(self):
        assert month_title(date(2024, 3, 9)) == "March 2024"
