from habitgrid.schemas.habit import HabitIn, HabitOut, HabitUpdateIn
from habitgrid.schemas.log import HabitLogIn, HabitLogOut
from habitgrid.schemas.stats import DayStatsOut, MonthStatsOut, SnapshotOut, WeekStatsOut
from habitgrid.schemas.timer import TimerCategory, TimerDayOut, TimerSessionIn, TimerSessionOut, TimerSummaryOut

__all__ = [
    "HabitIn",
    "HabitUpdateIn",
    "HabitOut",
    "HabitLogIn",
    "HabitLogOut",
    "SnapshotOut",
    "DayStatsOut",
    "WeekStatsOut",
    "MonthStatsOut",
    "TimerCategory",
    "TimerSessionIn",
    "TimerSessionOut",
    "TimerDayOut",
    "TimerSummaryOut",
]
