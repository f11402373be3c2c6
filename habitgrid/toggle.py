"""Optimistic completion toggling for a month grid.

The controller keeps a local view of the records for the month on screen. A
toggle flips the cell in that view at once, then writes through the gateway:

    IDLE -> SPECULATIVE -> RECONCILED   (store returned the authoritative record)
                        -> ROLLED_BACK  (write failed, view resynced from the store)
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional, Protocol

from habitgrid.dates import normalize_day
from habitgrid.errors import HabitTrackerError
from habitgrid.schemas import HabitLogOut, HabitOut
from habitgrid.stats import MonthSummary, month_summary
from habitgrid.weeks import DateLike, MonthView, build_month_view

logger = logging.getLogger(__name__)

RecordKey = tuple[int, date]


class LedgerGateway(Protocol):
    async def find_habits(self) -> list[HabitOut]: ...

    async def find_records(self, start: Any, end: Any) -> list[HabitLogOut]: ...

    async def upsert_record(
        self, habit_id: Any, day: Any, completed: bool, value: Optional[float] = None
    ) -> HabitLogOut: ...


class ToggleState(str, Enum):
    IDLE = "idle"
    SPECULATIVE = "speculative"
    RECONCILED = "reconciled"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class ToggleOutcome:
    state: ToggleState
    habit_id: int
    day: date
    completed: bool
    error: Optional[HabitTrackerError] = None

    @property
    def ok(self) -> bool:
        return self.state is ToggleState.RECONCILED


FailureCallback = Callable[[ToggleOutcome], None]


class ToggleController:
    def __init__(
        self,
        gateway: LedgerGateway,
        reference: DateLike,
        on_failure: Optional[FailureCallback] = None,
    ) -> None:
        self.gateway = gateway
        self.on_failure = on_failure
        self.view: MonthView = build_month_view(reference)
        self.habits: list[HabitOut] = []
        self.revision = 0
        self._records: dict[RecordKey, HabitLogOut] = {}
        self._generations: dict[RecordKey, int] = {}
        self._pending: dict[RecordKey, ToggleState] = {}

    async def refresh(self) -> None:
        """Replace the local view with what the store currently holds for the month."""
        habits = await self.gateway.find_habits()
        records = await self.gateway.find_records(self.view.start.isoformat(), self.view.end.isoformat())
        self.habits = list(habits)
        self._records = {(record.habit_id, record.day): record for record in records}
        self.revision += 1

    async def set_reference(self, reference: DateLike) -> None:
        self.view = build_month_view(reference)
        await self.refresh()

    def record(self, habit_id: int, day: Any) -> Optional[HabitLogOut]:
        return self._records.get((habit_id, normalize_day(day)))

    def is_completed(self, habit_id: int, day: Any) -> bool:
        record = self.record(habit_id, day)
        return bool(record and record.completed)

    def state(self, habit_id: int, day: Any) -> ToggleState:
        return self._pending.get((habit_id, normalize_day(day)), ToggleState.IDLE)

    @property
    def records(self) -> list[HabitLogOut]:
        return list(self._records.values())

    def stats(self) -> MonthSummary:
        return month_summary(self.habits, self._records.values(), self.view.first_day)

    def _apply(self, key: RecordKey, record: Optional[HabitLogOut]) -> None:
        if record is None:
            self._records.pop(key, None)
        else:
            self._records[key] = record
        self.revision += 1

    async def toggle(self, habit_id: int, day: Any) -> ToggleOutcome:
        key = (habit_id, normalize_day(day))
        previous = self._records.get(key)
        new_value = not (previous.completed if previous else False)

        generation = self._generations.get(key, 0) + 1
        self._generations[key] = generation
        if previous is not None:
            speculative = previous.model_copy(update={"completed": new_value})
        else:
            speculative = HabitLogOut(habit_id=habit_id, day=key[1], completed=new_value)
        self._apply(key, speculative)
        self._pending[key] = ToggleState.SPECULATIVE

        try:
            stored = await self.gateway.upsert_record(
                habit_id, key[1].isoformat(), new_value, previous.value if previous else None
            )
        except HabitTrackerError as exc:
            return await self._roll_back(key, generation, previous, exc)

        if self._generations.get(key) == generation:
            self._apply(key, stored)
            self._pending.pop(key, None)
        return ToggleOutcome(ToggleState.RECONCILED, habit_id, key[1], self.is_completed(*key))

    async def _roll_back(
        self, key: RecordKey, generation: int, previous: Optional[HabitLogOut], exc: HabitTrackerError
    ) -> ToggleOutcome:
        logger.warning("Failed to toggle habit %s on %s: %s", key[0], key[1], exc)
        try:
            await self.refresh()
        except HabitTrackerError as resync_exc:
            logger.error("Resync after failed toggle did not complete: %s", resync_exc)
            if self._generations.get(key) == generation:
                self._apply(key, previous)
        if self._generations.get(key) == generation:
            self._pending.pop(key, None)

        outcome = ToggleOutcome(ToggleState.ROLLED_BACK, key[0], key[1], self.is_completed(*key), exc)
        if self.on_failure is not None:
            self.on_failure(outcome)
        return outcome
