import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from habitgrid.crud.guard import persistence_guard
from habitgrid.crud.habits import coerce_habit_id, delete_log_rows, require_habit
from habitgrid.dates import normalize_day
from habitgrid.models import HabitLog

logger = logging.getLogger(__name__)


def _find_log(db: Session, habit_id: int, day: date) -> Optional[HabitLog]:
    return db.scalar(select(HabitLog).where(and_(HabitLog.habit_id == habit_id, HabitLog.day == day)))


def find_records(db: Session, start: Any, end: Any) -> list[HabitLog]:
    start_day = normalize_day(start, "start_date")
    end_day = normalize_day(end, "end_date")
    if start_day > end_day:
        return []

    with persistence_guard(db, "fetch logs"):
        return list(
            db.scalars(
                select(HabitLog)
                .where(and_(HabitLog.day >= start_day, HabitLog.day <= end_day))
                .order_by(HabitLog.day, HabitLog.habit_id)
            )
        )


def upsert_record(db: Session, habit_id: Any, day: Any, completed: bool, value: Optional[float] = None) -> HabitLog:
    """Create or overwrite the single record for (habit_id, day)."""
    target_id = coerce_habit_id(habit_id)
    target_day = normalize_day(day)
    require_habit(db, target_id)

    with persistence_guard(db, "update log"):
        log = _find_log(db, target_id, target_day)
        if log is None:
            log = HabitLog(habit_id=target_id, day=target_day, completed=bool(completed), value=value)
            db.add(log)
            try:
                db.commit()
            except IntegrityError:
                # another writer inserted the same key first; fall through to an update of its row
                db.rollback()
                log = _find_log(db, target_id, target_day)
                if log is None:
                    raise
                logger.info("Upsert conflict on habit %s day %s resolved as update", target_id, target_day)
                log.completed = bool(completed)
                log.value = value
                db.commit()
        else:
            log.completed = bool(completed)
            log.value = value
            db.commit()
        db.refresh(log)
    return log


def delete_records_for_habit(db: Session, habit_id: Any) -> int:
    target_id = coerce_habit_id(habit_id)
    with persistence_guard(db, "delete logs"):
        removed = delete_log_rows(db, target_id)
        db.commit()
    return removed
