"""Long-lived handle on the completion ledger.

One ``Ledger`` is built per process by ``create_app()`` and passed to whatever
needs durable access: the API dependencies and the toggle gateway. Each call
runs in its own short session.
"""

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy.orm import Session, sessionmaker

from habitgrid import crud
from habitgrid.schemas import HabitLogOut, HabitOut


class Ledger:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self._session_factory() as db:
            yield db

    def upsert(self, habit_id: Any, day: Any, completed: bool, value: Optional[float] = None) -> HabitLogOut:
        with self.session() as db:
            return HabitLogOut.model_validate(crud.upsert_record(db, habit_id, day, completed, value))

    def query(self, start: Any, end: Any) -> list[HabitLogOut]:
        with self.session() as db:
            return [HabitLogOut.model_validate(log) for log in crud.find_records(db, start, end)]

    def delete_for_habit(self, habit_id: Any) -> int:
        with self.session() as db:
            return crud.delete_records_for_habit(db, habit_id)

    def habits(self) -> list[HabitOut]:
        with self.session() as db:
            return [HabitOut.model_validate(habit) for habit in crud.find_habits(db)]


class SessionLedgerGateway:
    """Async face of a ``Ledger`` for the toggle controller; calls run in a worker thread."""

    def __init__(self, ledger: Ledger) -> None:
        self.ledger = ledger

    async def find_habits(self) -> list[HabitOut]:
        return await asyncio.to_thread(self.ledger.habits)

    async def find_records(self, start: Any, end: Any) -> list[HabitLogOut]:
        return await asyncio.to_thread(self.ledger.query, start, end)

    async def upsert_record(self, habit_id: Any, day: Any, completed: bool, value: Optional[float] = None) -> HabitLogOut:
        return await asyncio.to_thread(self.ledger.upsert, habit_id, day, completed, value)
