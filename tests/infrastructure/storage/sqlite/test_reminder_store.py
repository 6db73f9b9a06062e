"""Tests for SQLiteReminderStore."""

import asyncio
from datetime import date, timedelta
from pathlib import Path

import pytest

from src.core.entities import Reminder
from src.core.exceptions import (
    ReminderAlreadyCompletedError,
    ReminderNotFoundError,
    ValidationError,
)


class TestSQLiteReminderStore:
    """Tests for SQLiteReminderStore."""

    async def test_round_trip(self, seeded_db: dict, reminder_store):
        oil = seeded_db["oil_change"]

        fetched = await reminder_store.get(oil.id)

        assert fetched.vehicle_id == seeded_db["vehicle"].id
        assert fetched.description == "Oil Change"
        assert fetched.type == "Maintenance"
        assert fetched.due_date == date.today() + timedelta(days=30)
        assert fetched.is_completed is False
        assert fetched.due_speedometer_reading == 20000
        assert fetched.vehicle is None

    async def test_get_with_vehicle(self, seeded_db: dict, reminder_store):
        fetched = await reminder_store.get(seeded_db["oil_change"].id, with_vehicle=True)

        assert fetched.vehicle is not None
        assert fetched.vehicle.registration == "ABC123"

    async def test_get_missing(self, sqlite_pool: Path, reminder_store):
        assert await reminder_store.get(999) is None
        assert await reminder_store.get(999, with_vehicle=True) is None

    async def test_list_all_ordered_by_due_date(self, seeded_db: dict, reminder_store):
        await reminder_store.add(
            Reminder(
                vehicle_id=seeded_db["vehicle"].id,
                description="Inspection",
                due_date=date.today() + timedelta(days=5),
            )
        )

        reminders = await reminder_store.list_all()

        assert [r.description for r in reminders] == [
            "Inspection",
            "Oil Change",
            "Tire Rotation",
        ]

    async def test_list_all_excludes_completed(self, seeded_db: dict, reminder_store):
        await reminder_store.mark_completed(seeded_db["oil_change"].id)

        everything = await reminder_store.list_all()
        open_only = await reminder_store.list_all(include_completed=False)

        assert len(everything) == 2
        assert [r.description for r in open_only] == ["Tire Rotation"]

    async def test_list_all_with_vehicle(self, seeded_db: dict, reminder_store):
        reminders = await reminder_store.list_all_with_vehicle()

        assert len(reminders) == 2
        assert all(r.vehicle.make == "Toyota" for r in reminders)

    async def test_list_by_vehicle(
        self, seeded_db: dict, reminder_store, vehicle_store, sample_vehicle
    ):
        other = await vehicle_store.add(sample_vehicle.model_copy(update={"id": None}))

        assert len(await reminder_store.list_by_vehicle(seeded_db["vehicle"].id)) == 2
        assert await reminder_store.list_by_vehicle(other.id) == []

    async def test_update(self, seeded_db: dict, reminder_store):
        oil = seeded_db["oil_change"]
        oil.description = "Synthetic oil change"
        oil.due_date = date(2031, 1, 1)
        oil.due_speedometer_reading = None

        await reminder_store.update(oil)
        fetched = await reminder_store.get(oil.id)

        assert fetched.description == "Synthetic oil change"
        assert fetched.due_date == date(2031, 1, 1)
        assert fetched.due_speedometer_reading is None

    async def test_update_missing(self, sqlite_pool: Path, reminder_store):
        ghost = Reminder(id=999, vehicle_id=1, description="Ghost", due_date=date.today())

        with pytest.raises(ReminderNotFoundError):
            await reminder_store.update(ghost)

    async def test_delete(self, seeded_db: dict, reminder_store):
        oil_id = seeded_db["oil_change"].id
        assert await reminder_store.delete(oil_id) is True
        assert await reminder_store.get(oil_id) is None
        assert await reminder_store.delete(oil_id) is False


class TestMarkCompleted:
    """Compare-and-set transition of is_completed."""

    async def test_first_call_transitions(self, seeded_db: dict, reminder_store):
        oil_id = seeded_db["oil_change"].id

        assert await reminder_store.mark_completed(oil_id) is True
        assert (await reminder_store.get(oil_id)).is_completed is True

    async def test_second_call_reports_no_transition(self, seeded_db: dict, reminder_store):
        oil_id = seeded_db["oil_change"].id
        await reminder_store.mark_completed(oil_id)

        assert await reminder_store.mark_completed(oil_id) is False

    async def test_missing_reminder(self, sqlite_pool: Path, reminder_store):
        assert await reminder_store.mark_completed(999) is False

    async def test_concurrent_calls_have_one_winner(self, seeded_db: dict, reminder_store):
        oil_id = seeded_db["oil_change"].id

        results = await asyncio.gather(
            *(reminder_store.mark_completed(oil_id) for _ in range(5))
        )

        assert sorted(results) == [False, False, False, False, True]

    async def test_does_not_touch_other_reminders(self, seeded_db: dict, reminder_store):
        await reminder_store.mark_completed(seeded_db["oil_change"].id)
        tires = await reminder_store.get(seeded_db["tire_rotation"].id)
        assert tires.is_completed is False


class TestReminderStoreValidation:
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.get(0),
            lambda s: s.get(-1, with_vehicle=True),
            lambda s: s.list_by_vehicle(0),
            lambda s: s.delete(0),
            lambda s: s.mark_completed(0),
            lambda s: s.add(None),
            lambda s: s.update(None),
        ],
    )
    async def test_rejects_bad_arguments(self, reminder_store, call):
        with pytest.raises(ValidationError):
            await call(reminder_store)


class TestUpdateCompleted:
    """Edits cannot reopen or change a completed reminder."""

    async def test_stale_copy_does_not_reopen(self, seeded_db: dict, reminder_store):
        oil_id = seeded_db["oil_change"].id
        stale = await reminder_store.get(oil_id)
        await reminder_store.mark_completed(oil_id)

        stale.description = "Edited after completion"
        with pytest.raises(ReminderAlreadyCompletedError):
            await reminder_store.update(stale)

        stored = await reminder_store.get(oil_id)
        assert stored.is_completed is True
        assert stored.description == "Oil Change"

    async def test_update_never_writes_flag(self, seeded_db: dict, reminder_store):
        oil = seeded_db["oil_change"]
        oil.is_completed = True

        await reminder_store.update(oil)

        assert (await reminder_store.get(oil.id)).is_completed is False
        assert await reminder_store.mark_completed(oil.id) is True
