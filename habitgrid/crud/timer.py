from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from habitgrid.crud.guard import persistence_guard
from habitgrid.errors import ValidationError
from habitgrid.models import TIMER_CATEGORIES, TimerLog

TIMER_RANGES = ("today", "week", "month")
MS_PER_HOUR = 1000 * 60 * 60


def create_timer_session(db: Session, category: str, start: datetime, end: datetime, duration_ms: int) -> TimerLog:
    if category not in TIMER_CATEGORIES:
        raise ValidationError(f"category must be one of {', '.join(TIMER_CATEGORIES)}")
    if start is None or end is None:
        raise ValidationError("start_time and end_time required")
    if end < start:
        raise ValidationError("end_time must not be before start_time")
    if duration_ms is None or int(duration_ms) < 0:
        raise ValidationError("duration_ms must be a non-negative number")

    log = TimerLog(category=category, start_time=start, end_time=end, duration_ms=int(duration_ms))
    with persistence_guard(db, "create timer log"):
        db.add(log)
        db.commit()
        db.refresh(log)
    return log


def range_start(range_filter: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    now = now or datetime.now()
    if range_filter in (None, "", "all"):
        return None
    if range_filter == "today":
        return datetime.combine(now.date(), time.min)
    if range_filter == "week":
        return now - timedelta(days=7)
    if range_filter == "month":
        return now - timedelta(days=30)
    raise ValidationError(f"range must be one of {', '.join(TIMER_RANGES)}")


def find_timer_sessions(db: Session, range_filter: Optional[str] = None, now: Optional[datetime] = None) -> list[TimerLog]:
    now = now or datetime.now()
    query = select(TimerLog).order_by(TimerLog.start_time.desc())
    since = range_start(range_filter, now)
    if since is not None:
        query = query.where(TimerLog.start_time >= since)
    if range_filter == "today":
        query = query.where(TimerLog.start_time <= datetime.combine(now.date(), time.max))

    with persistence_guard(db, "fetch timer logs"):
        return list(db.scalars(query))


def summarize_timer_sessions(sessions: Iterable[Any], days: Iterable[date]) -> dict[str, Any]:
    """Per-category totals and per-day hours (one decimal) for the given days."""
    totals = {category: 0 for category in TIMER_CATEGORIES}
    per_day: dict[date, dict[str, int]] = {day: {category: 0 for category in TIMER_CATEGORIES} for day in days}

    for session in sessions:
        if session.category not in totals:
            continue
        totals[session.category] += session.duration_ms
        bucket = per_day.get(session.start_time.date())
        if bucket is not None:
            bucket[session.category] += session.duration_ms

    return {
        "total_ms": sum(totals.values()),
        "totals_ms": totals,
        "days": [
            {
                "day": day.isoformat(),
                "hours": {category: round(ms / MS_PER_HOUR, 1) for category, ms in buckets.items()},
            }
            for day, buckets in per_day.items()
        ],
    }
