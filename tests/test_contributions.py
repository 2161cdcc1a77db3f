"""
Tests for the contribution heatmap grid.
"""

from datetime import date, timedelta

import pytest

from practice.contributions import (
    build_grid,
    contribution_months,
    default_range,
    intensity_for,
    shift_months,
)
from practice.models import ContributionCell


def _cells(weeks):
    return [cell for week in weeks for cell in week if cell is not None]


class TestBuildGrid:
    """Tests for build_grid."""

    def test_fourteen_days_from_wednesday(self):
        start = date(2024, 1, 3)  # Wednesday
        end = start + timedelta(days=13)

        weeks = build_grid(start, end, {}, {})

        assert len(weeks) == 3
        assert all(len(week) == 7 for week in weeks)
        assert len(_cells(weeks)) == 14
        assert weeks[0][:2] == (None, None)
        assert weeks[0][2].day == start
        assert weeks[-1][1].day == end
        assert weeks[-1][2:] == (None,) * 5

    def test_monday_to_sunday_is_one_full_week(self):
        weeks = build_grid(date(2024, 1, 1), date(2024, 1, 7), {}, {})
        assert len(weeks) == 1
        assert [cell.day.day for cell in weeks[0]] == [1, 2, 3, 4, 5, 6, 7]

    def test_single_sunday(self):
        weeks = build_grid(date(2024, 1, 7), date(2024, 1, 7), {}, {})
        assert weeks == [(None,) * 6 + (ContributionCell(date(2024, 1, 7)),)]

    def test_start_after_end_is_empty(self):
        assert build_grid(date(2024, 1, 8), date(2024, 1, 7), {}, {}) == []

    def test_weeks_are_chronological(self):
        weeks = build_grid(date(2024, 2, 20), date(2024, 4, 2), {}, {})
        days = [cell.day for cell in _cells(weeks)]
        assert days == sorted(days)
        assert len(days) == (date(2024, 4, 2) - date(2024, 2, 20)).days + 1

    def test_cells_carry_score_and_count(self):
        day = date(2024, 1, 4)
        weeks = build_grid(date(2024, 1, 1), date(2024, 1, 7), {day: 88}, {day: 2})
        cell = weeks[0][3]
        assert cell == ContributionCell(day, score=88, practice_count=2)
        assert cell.intensity == 4
        assert weeks[0][0].intensity == 0

    def test_score_without_practice_is_dropped(self):
        day = date(2024, 1, 4)
        weeks = build_grid(day, day, {day: 90}, {})
        assert weeks[0][3] == ContributionCell(day, score=0, practice_count=0)


class TestIntensity:
    """Tests for intensity buckets."""

    @pytest.mark.parametrize("score,expected", [
        (0, 1),
        (59, 1),
        (60, 2),
        (74, 2),
        (75, 3),
        (84, 3),
        (85, 4),
        (100, 4),
    ])
    def test_buckets(self, score, expected):
        assert intensity_for(score, 1) == expected

    def test_no_practice_is_zero(self):
        assert intensity_for(100, 0) == 0


class TestMonthsAndRange:
    """Tests for month labels and the default window."""

    def test_month_labels_in_grid_order(self):
        weeks = build_grid(date(2023, 12, 28), date(2024, 2, 2), {}, {})
        assert contribution_months(weeks) == ["Dec", "Jan", "Feb"]

    def test_shift_months_clamps_day(self):
        assert shift_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
        assert shift_months(date(2024, 1, 15), -8) == date(2023, 5, 15)
        assert shift_months(date(2023, 11, 30), 3) == date(2024, 2, 29)

    def test_default_range_is_eight_months(self):
        assert default_range(date(2024, 10, 19)) == (date(2024, 2, 19), date(2024, 10, 19))
