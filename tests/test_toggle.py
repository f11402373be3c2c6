import asyncio
from datetime import date

import pytest

from habitgrid.errors import PersistenceUnavailable, ValidationError
from habitgrid.ledger import SessionLedgerGateway
from habitgrid.schemas import HabitLogOut, HabitOut
from habitgrid.toggle import ToggleController, ToggleState

DAY = date(2025, 3, 15)


class FakeGateway:
    """In-memory gateway; upserts can be held open or made to fail."""

    def __init__(self, habits):
        self.habits = habits
        self.rows = {}
        self.next_id = 1
        self.fail_upserts = False
        self.fail_reads = False
        self.gate = None
        self.upserts = []

    async def find_habits(self):
        if self.fail_reads:
            raise PersistenceUnavailable("Failed to fetch habits")
        return list(self.habits)

    async def find_records(self, start, end):
        if self.fail_reads:
            raise PersistenceUnavailable("Failed to fetch logs")
        lo, hi = date.fromisoformat(start), date.fromisoformat(end)
        return [row for (_, day), row in self.rows.items() if lo <= day <= hi]

    async def upsert_record(self, habit_id, day, completed, value=None):
        self.upserts.append((habit_id, day, completed))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_upserts:
            raise PersistenceUnavailable("Failed to update log")
        key = (habit_id, date.fromisoformat(day))
        existing = self.rows.get(key)
        row_id = existing.id if existing else self.next_id
        if existing is None:
            self.next_id += 1
        row = HabitLogOut(id=row_id, habit_id=habit_id, day=key[1], completed=completed, value=value)
        self.rows[key] = row
        return row


def _habit(habit_id):
    return HabitOut(id=habit_id, name=f"habit {habit_id}", icon="⚡", color="neon-blue", description="", goal=0, order=0)


@pytest.fixture
def gateway():
    return FakeGateway([_habit(1)])


@pytest.mark.asyncio
async def test_single_toggle_round_trip(gateway):
    gateway.gate = asyncio.Event()
    controller = ToggleController(gateway, DAY)
    await controller.refresh()
    assert controller.is_completed(1, DAY) is False

    task = asyncio.create_task(controller.toggle(1, DAY))
    await asyncio.sleep(0)
    assert controller.is_completed(1, DAY) is True
    assert controller.state(1, DAY) is ToggleState.SPECULATIVE

    gateway.gate.set()
    outcome = await task
    assert outcome.state is ToggleState.RECONCILED
    assert outcome.completed is True
    assert controller.record(1, DAY).id == 1
    assert controller.state(1, DAY) is ToggleState.IDLE

    outcome = await controller.toggle(1, DAY)
    assert outcome.completed is False
    assert controller.is_completed(1, DAY) is False
    assert gateway.rows[(1, DAY)].completed is False
    assert len(gateway.rows) == 1


@pytest.mark.asyncio
async def test_speculative_value_is_visible_before_write_resolves(gateway):
    gateway.gate = asyncio.Event()
    controller = ToggleController(gateway, DAY)
    await controller.refresh()

    task = asyncio.create_task(controller.toggle(1, DAY))
    await asyncio.sleep(0)
    assert controller.is_completed(1, DAY) is True
    assert controller.record(1, DAY).id is None
    assert controller.stats().overall.completed == 1

    gateway.gate.set()
    await task
    assert controller.record(1, DAY).id == 1


@pytest.mark.asyncio
async def test_second_toggle_reads_local_speculative_state(gateway):
    gateway.gate = asyncio.Event()
    controller = ToggleController(gateway, DAY)
    await controller.refresh()

    first = asyncio.create_task(controller.toggle(1, DAY))
    await asyncio.sleep(0)
    second = asyncio.create_task(controller.toggle(1, DAY))
    await asyncio.sleep(0)

    # the second flip started from the speculative True, not the stored False
    assert [completed for _, _, completed in gateway.upserts] == [True, False]
    assert controller.is_completed(1, DAY) is False

    gateway.gate.set()
    await first
    assert controller.is_completed(1, DAY) is False
    await second
    assert controller.is_completed(1, DAY) is False
    assert gateway.rows[(1, DAY)].completed is False


@pytest.mark.asyncio
async def test_failed_write_rolls_back_and_resyncs(gateway):
    failures = []
    controller = ToggleController(gateway, DAY, on_failure=failures.append)
    await controller.refresh()

    gateway.fail_upserts = True
    outcome = await controller.toggle(1, DAY)

    assert outcome.state is ToggleState.ROLLED_BACK
    assert isinstance(outcome.error, PersistenceUnavailable)
    assert outcome.completed is False
    assert controller.is_completed(1, DAY) is False
    assert failures == [outcome]


@pytest.mark.asyncio
async def test_resync_picks_up_store_state(gateway):
    controller = ToggleController(gateway, DAY)
    await controller.refresh()
    # another session completed the habit behind our back
    gateway.rows[(1, DAY)] = HabitLogOut(id=9, habit_id=1, day=DAY, completed=True)

    gateway.fail_upserts = True
    outcome = await controller.toggle(1, DAY)

    assert outcome.state is ToggleState.ROLLED_BACK
    assert controller.is_completed(1, DAY) is True
    assert controller.record(1, DAY).id == 9


@pytest.mark.asyncio
async def test_failed_resync_restores_previous_record(gateway):
    controller = ToggleController(gateway, DAY)
    await controller.refresh()
    await controller.toggle(1, DAY)

    gateway.fail_upserts = True
    gateway.fail_reads = True
    outcome = await controller.toggle(1, DAY)

    assert outcome.state is ToggleState.ROLLED_BACK
    assert controller.is_completed(1, DAY) is True


@pytest.mark.asyncio
async def test_invalid_day_is_rejected_before_local_change(gateway):
    controller = ToggleController(gateway, DAY)
    await controller.refresh()
    revision = controller.revision

    with pytest.raises(ValidationError):
        await controller.toggle(1, "not-a-day")
    assert controller.revision == revision
    assert gateway.upserts == []


@pytest.mark.asyncio
async def test_month_navigation_reloads_scope(gateway):
    gateway.rows[(1, date(2025, 4, 2))] = HabitLogOut(id=5, habit_id=1, day=date(2025, 4, 2), completed=True)
    controller = ToggleController(gateway, DAY)
    await controller.refresh()
    # April 2nd sits in the trailing padding week of March 2025
    assert controller.stats().weeks[-1].snapshot.completed == 1
    assert controller.stats().overall.completed == 0

    await controller.set_reference(date(2025, 4, 1))
    assert controller.stats().overall.completed == 1


@pytest.mark.asyncio
async def test_toggle_against_database(ledger, habit):
    controller = ToggleController(SessionLedgerGateway(ledger), DAY)
    await controller.refresh()
    assert [h.id for h in controller.habits] == [habit.id]

    outcome = await controller.toggle(habit.id, DAY)
    assert outcome.ok
    assert controller.record(habit.id, DAY).id is not None
    assert [r.completed for r in ledger.query(DAY, DAY)] == [True]

    await controller.toggle(habit.id, DAY)
    assert [r.completed for r in ledger.query(DAY, DAY)] == [False]


@pytest.mark.asyncio
async def test_toggle_unknown_habit_rolls_back(ledger, habit):
    controller = ToggleController(SessionLedgerGateway(ledger), DAY)
    await controller.refresh()

    outcome = await controller.toggle(habit.id + 100, DAY)

    assert outcome.state is ToggleState.ROLLED_BACK
    assert controller.is_completed(habit.id + 100, DAY) is False
    assert ledger.query(DAY, DAY) == []


@pytest.mark.asyncio
async def test_toggle_keeps_quantity_value(ledger, habit):
    ledger.upsert(habit.id, DAY, True, 4.0)
    controller = ToggleController(SessionLedgerGateway(ledger), DAY)
    await controller.refresh()

    await controller.toggle(habit.id, DAY)
    await controller.toggle(habit.id, DAY)

    (stored,) = ledger.query(DAY, DAY)
    assert stored.completed is True
    assert stored.value == 4.0
    assert controller.record(habit.id, DAY).value == 4.0
