from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

TimerCategory = Literal["Study", "Food", "Other"]


class TimerSessionIn(BaseModel):
    category: TimerCategory
    start_time: datetime
    end_time: datetime
    duration_ms: int = Field(ge=0)


class TimerSessionOut(BaseModel):
    id: int
    category: TimerCategory
    start_time: datetime
    end_time: datetime
    duration_ms: int

    class Config:
        from_attributes = True


class TimerDayOut(BaseModel):
    day: str
    hours: dict[str, float]


class TimerSummaryOut(BaseModel):
    range: str
    total_ms: int
    totals_ms: dict[str, int]
    days: list[TimerDayOut]
