from habitgrid.crud.habits import (
    coerce_habit_id,
    create_habit,
    delete_habit,
    find_habits,
    get_habit,
    require_habit,
    update_habit,
)
from habitgrid.crud.logs import delete_records_for_habit, find_records, upsert_record
from habitgrid.crud.timer import create_timer_session, find_timer_sessions, summarize_timer_sessions

__all__ = [
    "coerce_habit_id",
    "find_habits",
    "get_habit",
    "require_habit",
    "create_habit",
    "update_habit",
    "delete_habit",
    "find_records",
    "upsert_record",
    "delete_records_for_habit",
    "create_timer_session",
    "find_timer_sessions",
    "summarize_timer_sessions",
]
