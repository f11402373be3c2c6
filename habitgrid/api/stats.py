from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from habitgrid.api.deps import get_db
from habitgrid.crud import find_habits, find_records
from habitgrid.dates import optional_day
from habitgrid.schemas import DayStatsOut, MonthStatsOut, SnapshotOut, WeekStatsOut
from habitgrid.stats import MonthSummary, month_summary
from habitgrid.weeks import build_month_view

router = APIRouter(prefix="/api/stats", tags=["stats"])


def _summary_out(summary: MonthSummary) -> MonthStatsOut:
    view = summary.view
    return MonthStatsOut(
        year=view.year,
        month=view.month,
        start=view.start,
        end=view.end,
        habit_count=summary.habit_count,
        overall=SnapshotOut(**summary.overall.as_dict()),
        weeks=[
            WeekStatsOut(week_index=item.week_index, days=list(item.week), **item.snapshot.as_dict())
            for item in summary.weeks
        ],
        daily=[DayStatsOut(day=item.day, **item.snapshot.as_dict()) for item in summary.daily],
    )


@router.get("/month", response_model=MonthStatsOut)
def month_stats(reference_date: Optional[str] = Query(default=None, alias="date"), db: Session = Depends(get_db)) -> MonthStatsOut:
    reference = optional_day(reference_date) or date.today()
    view = build_month_view(reference)
    habits = find_habits(db)
    records = find_records(db, view.start, view.end)
    return _summary_out(month_summary(habits, records, reference))
