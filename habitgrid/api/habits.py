from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from habitgrid.api.deps import get_db
from habitgrid.crud import create_habit, delete_habit, find_habits, update_habit
from habitgrid.schemas import HabitIn, HabitOut, HabitUpdateIn

router = APIRouter(prefix="/api/habits", tags=["habits"])


@router.get("", response_model=List[HabitOut])
def list_habits(db: Session = Depends(get_db)) -> List[Any]:
    return find_habits(db)


@router.post("", response_model=HabitOut, status_code=201)
def add_habit(payload: HabitIn, db: Session = Depends(get_db)) -> Any:
    return create_habit(db, payload.model_dump())


@router.put("/{habit_id}", response_model=HabitOut)
def edit_habit(habit_id: int, payload: HabitUpdateIn, db: Session = Depends(get_db)) -> Any:
    return update_habit(db, habit_id, payload.model_dump(exclude_unset=True))


@router.delete("/{habit_id}")
def remove_habit(habit_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    removed = delete_habit(db, habit_id)
    return {"message": "Deleted successfully", "deleted_logs": removed}
