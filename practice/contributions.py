"""Calendar heatmap of daily practice."""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Mapping, Optional, Tuple

import config
from practice.models import ContributionCell, ContributionWeek, intensity_for

__all__ = [
    "build_grid",
    "contribution_months",
    "default_range",
    "intensity_for",
    "shift_months",
]

DAYS_PER_WEEK = 7


def build_grid(
    start: date,
    end: date,
    daily_best_score: Mapping[date, int],
    daily_count: Mapping[date, int]
) -> List[ContributionWeek]:
    """
    Bucket every day in [start, end] into Monday-first weeks.

    Days before ``start`` in the first week and after ``end`` in the last week
    are None, so every week has exactly seven slots.

    Args:
        start: First day (inclusive), any weekday
        end: Last day (inclusive)
        daily_best_score: Best score in percent per day
        daily_count: Number of practices per day

    Returns:
        Weeks in chronological order
    """
    if start > end:
        return []

    weeks: List[ContributionWeek] = []
    week: List[Optional[ContributionCell]] = [None] * DAYS_PER_WEEK
    day = start
    while day <= end:
        count = daily_count.get(day, 0)
        week[day.weekday()] = ContributionCell(
            day=day,
            score=daily_best_score.get(day, 0) if count else 0,
            practice_count=count,
        )
        if day.weekday() == DAYS_PER_WEEK - 1:
            weeks.append(tuple(week))
            week = [None] * DAYS_PER_WEEK
        day += timedelta(days=1)

    if any(cell is not None for cell in week):
        weeks.append(tuple(week))

    return weeks


def contribution_months(weeks: Iterable[ContributionWeek]) -> List[str]:
    """Month abbreviations in the order they first appear in the grid."""
    months: List[str] = []
    for week in weeks:
        for cell in week:
            if cell is None:
                continue
            label = calendar.month_abbr[cell.day.month]
            if label not in months:
                months.append(label)
    return months


def shift_months(day: date, months: int) -> date:
    """Move a date by whole calendar months, clamping the day of month."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def default_range(today: date, months: int = config.CONTRIBUTION_MONTHS) -> Tuple[date, date]:
    """Heatmap window ending today and reaching back ``months`` months."""
    return shift_months(today, -months), today
