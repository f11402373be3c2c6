"""Month-to-week partitioning for the habit grid.

Weeks start on Sunday. A month is always shown as whole weeks, so the first and
last week borrow days from the neighbouring months.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator, Union

WEEK_START = calendar.SUNDAY
DAYS_PER_WEEK = 7

_calendar = calendar.Calendar(firstweekday=WEEK_START)

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class WeekWindow:
    days: tuple[date, ...]

    def __post_init__(self) -> None:
        if len(self.days) != DAYS_PER_WEEK:
            raise ValueError(f"a week holds exactly {DAYS_PER_WEEK} days, got {len(self.days)}")

    @property
    def start(self) -> date:
        return self.days[0]

    @property
    def end(self) -> date:
        return self.days[-1]

    def __iter__(self) -> Iterator[date]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    weeks: tuple[WeekWindow, ...]

    @property
    def start(self) -> date:
        return self.weeks[0].start

    @property
    def end(self) -> date:
        return self.weeks[-1].end

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def days(self) -> list[date]:
        return [day for week in self.weeks for day in week]

    @property
    def month_days(self) -> list[date]:
        return [day for day in self.days if self.is_in_month(day)]

    @property
    def padding_days(self) -> list[date]:
        return [day for day in self.days if not self.is_in_month(day)]

    def is_in_month(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month


def _as_date(reference: DateLike) -> date:
    return reference.date() if isinstance(reference, datetime) else reference


def month_bounds(reference: DateLike) -> tuple[date, date]:
    ref = _as_date(reference)
    last = calendar.monthrange(ref.year, ref.month)[1]
    return date(ref.year, ref.month, 1), date(ref.year, ref.month, last)


def shift_month(reference: DateLike, delta: int) -> date:
    """First day of the month ``delta`` months away from ``reference``."""
    ref = _as_date(reference)
    index = ref.year * 12 + (ref.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def get_weeks(reference: DateLike) -> list[WeekWindow]:
    ref = _as_date(reference)
    return [WeekWindow(tuple(week)) for week in _calendar.monthdatescalendar(ref.year, ref.month)]


def build_month_view(reference: DateLike) -> MonthView:
    ref = _as_date(reference)
    return MonthView(year=ref.year, month=ref.month, weeks=tuple(get_weeks(ref)))
