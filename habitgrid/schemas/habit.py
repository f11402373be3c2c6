from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HabitIn(BaseModel):
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    goal: Optional[float] = None
    order: Optional[int] = None


class HabitUpdateIn(BaseModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    goal: Optional[float] = None
    order: Optional[int] = None


class HabitOut(BaseModel):
    id: int
    name: str
    icon: str
    color: str
    description: str
    goal: float
    order: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
