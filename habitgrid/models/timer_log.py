from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from habitgrid.models.base import Base

TIMER_CATEGORIES = ("Study", "Food", "Other")


class TimerLog(Base):
    __tablename__ = "timer_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    category: Mapped[str] = mapped_column(String(16), index=True)
    start_time: Mapped[datetime] = mapped_column(DateTime, index=True)
    end_time: Mapped[datetime] = mapped_column(DateTime)
    duration_ms: Mapped[int] = mapped_column(BigInteger)
