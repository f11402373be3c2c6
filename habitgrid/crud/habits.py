import logging
from typing import Any, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from habitgrid.crud.guard import persistence_guard
from habitgrid.errors import NotFoundError, ValidationError
from habitgrid.models import Habit, HabitLog

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "icon", "color", "description", "goal", "order")
DEFAULTS: dict[str, Any] = {"icon": "📝", "color": "neon-blue", "description": "", "goal": 0, "order": 0}


def coerce_habit_id(raw: Any) -> int:
    if raw is None or isinstance(raw, bool):
        raise ValidationError("habit_id required")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValidationError(f"habit_id is malformed: {raw!r}")
    try:
        habit_id = int(str(raw).strip()) if isinstance(raw, str) else int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"habit_id is malformed: {raw!r}") from exc
    if habit_id <= 0:
        raise ValidationError(f"habit_id is malformed: {raw!r}")
    return habit_id


def _clean_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    values = {key: fields[key] for key in EDITABLE_FIELDS if fields.get(key) is not None}
    if "name" in values:
        name = str(values["name"]).strip()
        if not name:
            raise ValidationError("Habit name required")
        values["name"] = name
    if "description" in values:
        values["description"] = str(values["description"])
    return values


def find_habits(db: Session) -> list[Habit]:
    with persistence_guard(db, "fetch habits"):
        return list(db.scalars(select(Habit).order_by(Habit.order, Habit.id)))


def get_habit(db: Session, habit_id: Any) -> Optional[Habit]:
    with persistence_guard(db, "fetch habit"):
        return db.get(Habit, coerce_habit_id(habit_id))


def require_habit(db: Session, habit_id: Any) -> Habit:
    habit = get_habit(db, habit_id)
    if not habit:
        raise NotFoundError("Habit not found")
    return habit


def create_habit(db: Session, fields: Mapping[str, Any]) -> Habit:
    values = {**DEFAULTS, **_clean_fields(fields)}
    if "name" not in values:
        raise ValidationError("Habit name required")

    habit = Habit(**values)
    with persistence_guard(db, "create habit"):
        db.add(habit)
        db.commit()
        db.refresh(habit)
    logger.info("Created habit %s (%s)", habit.id, habit.name)
    return habit


def update_habit(db: Session, habit_id: Any, fields: Mapping[str, Any]) -> Habit:
    habit = require_habit(db, habit_id)
    values = _clean_fields(fields)
    with persistence_guard(db, "update habit"):
        for key, value in values.items():
            setattr(habit, key, value)
        db.add(habit)
        db.commit()
        db.refresh(habit)
    return habit


def delete_log_rows(db: Session, habit_id: int) -> int:
    result = db.execute(delete(HabitLog).where(HabitLog.habit_id == habit_id))
    return result.rowcount or 0


def delete_habit(db: Session, habit_id: Any) -> int:
    """Delete a habit together with every completion record it owns."""
    target_id = require_habit(db, habit_id).id
    with persistence_guard(db, "delete habit"):
        removed = delete_log_rows(db, target_id)
        db.execute(delete(Habit).where(Habit.id == target_id))
        db.commit()
    logger.info("Deleted habit %s and %s completion records", target_id, removed)
    return removed
