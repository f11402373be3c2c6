from datetime import date, timedelta
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from habitgrid.api.deps import get_db
from habitgrid.crud import create_timer_session, find_timer_sessions, summarize_timer_sessions
from habitgrid.schemas import TimerSessionIn, TimerSessionOut, TimerSummaryOut

router = APIRouter(prefix="/api/timer", tags=["timer"])

SUMMARY_DAYS = {"today": 1, "week": 7, "month": 30}


@router.post("", response_model=TimerSessionOut, status_code=201)
def add_timer_session(payload: TimerSessionIn, db: Session = Depends(get_db)) -> Any:
    return create_timer_session(db, payload.category, payload.start_time, payload.end_time, payload.duration_ms)


@router.get("", response_model=List[TimerSessionOut])
def list_timer_sessions(range_filter: Optional[str] = Query(default=None, alias="range"), db: Session = Depends(get_db)) -> List[Any]:
    return find_timer_sessions(db, range_filter)


@router.get("/summary", response_model=TimerSummaryOut)
def timer_summary(range_filter: str = Query(default="week", alias="range"), db: Session = Depends(get_db)) -> TimerSummaryOut:
    sessions = find_timer_sessions(db, range_filter)
    today = date.today()
    span = SUMMARY_DAYS.get(range_filter, 7)
    days = [today - timedelta(days=offset) for offset in range(span - 1, -1, -1)]
    return TimerSummaryOut(range=range_filter, **summarize_timer_sessions(sessions, days))
