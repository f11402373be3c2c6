from datetime import date

from pydantic import BaseModel


class SnapshotOut(BaseModel):
    completed: int
    possible: int
    completion_rate: int


class DayStatsOut(SnapshotOut):
    day: date


class WeekStatsOut(SnapshotOut):
    week_index: int
    days: list[date]


class MonthStatsOut(BaseModel):
    year: int
    month: int
    start: date
    end: date
    habit_count: int
    overall: SnapshotOut
    weeks: list[WeekStatsOut]
    daily: list[DayStatsOut]
