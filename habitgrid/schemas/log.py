from datetime import date
from typing import Any, Optional

from pydantic import BaseModel


class HabitLogIn(BaseModel):
    habit_id: Optional[Any] = None
    day: Optional[Any] = None
    completed: bool = False
    value: Optional[float] = None


class HabitLogOut(BaseModel):
    id: Optional[int] = None
    habit_id: int
    day: date
    completed: bool = False
    value: Optional[float] = None

    class Config:
        from_attributes = True
        frozen = True
