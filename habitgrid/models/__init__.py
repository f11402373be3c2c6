from habitgrid.models.base import Base
from habitgrid.models.habit import Habit
from habitgrid.models.habit_log import HabitLog
from habitgrid.models.timer_log import TIMER_CATEGORIES, TimerLog

__all__ = [
    "Base",
    "Habit",
    "HabitLog",
    "TimerLog",
    "TIMER_CATEGORIES",
]
