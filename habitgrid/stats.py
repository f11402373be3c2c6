"""Completion statistics derived from habits and their completion records.

All functions are pure. ``habits`` is the active habit set (anything with an
``id``), ``records`` any iterable of records with ``habit_id``, ``day`` and
``completed``. Records for habits outside the active set are ignored.

Weekly figures use the full 7-day window, padding days included. Monthly
figures only count days inside the named month.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from habitgrid.weeks import DateLike, MonthView, WeekWindow, build_month_view

CompletionKey = tuple[int, date]


def completion_rate(completed: int, possible: int) -> int:
    """Percentage rounded half up, 0 when nothing is possible."""
    if possible <= 0:
        return 0
    return (200 * completed + possible) // (2 * possible)


@dataclass(frozen=True)
class StatsSnapshot:
    completed: int = 0
    possible: int = 0

    @property
    def completion_rate(self) -> int:
        return completion_rate(self.completed, self.possible)

    def as_dict(self) -> dict[str, int]:
        return {"completed": self.completed, "possible": self.possible, "completion_rate": self.completion_rate}


@dataclass(frozen=True)
class WeekStats:
    week_index: int
    week: WeekWindow
    snapshot: StatsSnapshot


@dataclass(frozen=True)
class DayStats:
    day: date
    snapshot: StatsSnapshot


@dataclass(frozen=True)
class MonthSummary:
    view: MonthView
    habit_count: int
    overall: StatsSnapshot
    weeks: list[WeekStats]
    daily: list[DayStats]


def _active_ids(habits: Iterable[Any]) -> set[int]:
    return {habit.id for habit in habits}


def active_records(habits: Iterable[Any], records: Iterable[Any]) -> list[Any]:
    ids = _active_ids(habits)
    return [record for record in records if record.habit_id in ids]


def completed_keys(habits: Iterable[Any], records: Iterable[Any]) -> set[CompletionKey]:
    """(habit_id, day) pairs marked completed for active habits; duplicates collapse."""
    return {(record.habit_id, record.day) for record in active_records(habits, records) if record.completed}


def _count_on(keys: set[CompletionKey], days: Iterable[date]) -> int:
    wanted = set(days)
    return sum(1 for _, day in keys if day in wanted)


def daily_stats(habits: Iterable[Any], records: Iterable[Any], day: date) -> StatsSnapshot:
    habits = list(habits)
    keys = completed_keys(habits, records)
    return StatsSnapshot(completed=_count_on(keys, [day]), possible=len(habits))


def weekly_stats(habits: Iterable[Any], records: Iterable[Any], week: WeekWindow) -> StatsSnapshot:
    habits = list(habits)
    keys = completed_keys(habits, records)
    return StatsSnapshot(completed=_count_on(keys, week), possible=len(habits) * len(week))


def monthly_stats(habits: Iterable[Any], records: Iterable[Any], reference: DateLike) -> StatsSnapshot:
    habits = list(habits)
    view = build_month_view(reference)
    month_days = view.month_days
    keys = completed_keys(habits, records)
    return StatsSnapshot(completed=_count_on(keys, month_days), possible=len(habits) * len(month_days))


def month_summary(habits: Iterable[Any], records: Iterable[Any], reference: DateLike) -> MonthSummary:
    habits = list(habits)
    records = list(records)
    view = build_month_view(reference)
    keys = completed_keys(habits, records)
    count = len(habits)

    weeks = [
        WeekStats(
            week_index=index,
            week=week,
            snapshot=StatsSnapshot(completed=_count_on(keys, week), possible=count * len(week)),
        )
        for index, week in enumerate(view.weeks, start=1)
    ]
    daily = [
        DayStats(day=day, snapshot=StatsSnapshot(completed=_count_on(keys, [day]), possible=count))
        for day in view.month_days
    ]
    overall = StatsSnapshot(completed=_count_on(keys, view.month_days), possible=count * len(view.month_days))
    return MonthSummary(view=view, habit_count=count, overall=overall, weeks=weeks, daily=daily)


def completion_grid(habits: Iterable[Any], records: Iterable[Any], days: Iterable[date]) -> dict[int, dict[date, bool]]:
    """Per-habit, per-day completed flags for rendering the grid."""
    habits = list(habits)
    days = list(days)
    keys = completed_keys(habits, records)
    return {habit.id: {day: (habit.id, day) in keys for day in days} for habit in habits}
