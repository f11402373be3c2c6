from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from habitgrid.api.deps import get_db
from habitgrid.crud import find_records, upsert_record
from habitgrid.schemas import HabitLogIn, HabitLogOut

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("", response_model=List[HabitLogOut])
def list_logs(start_date: Optional[str] = None, end_date: Optional[str] = None, db: Session = Depends(get_db)) -> List[Any]:
    return find_records(db, start_date, end_date)


@router.post("", response_model=HabitLogOut)
def save_log(payload: HabitLogIn, db: Session = Depends(get_db)) -> Any:
    return upsert_record(db, payload.habit_id, payload.day, payload.completed, payload.value)
