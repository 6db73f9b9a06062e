"""Integration tests for reminder completion against a real SQLite database."""

import asyncio
import sqlite3
from datetime import date, timedelta
from unittest.mock import AsyncMock, patch

import aiosqlite
import pytest

from src.application.use_cases.complete_reminder import CompleteReminderUseCase
from src.core.exceptions import (
    DatabaseError,
    OperationTimeoutError,
    ReminderAlreadyCompletedError,
    ReminderCompletionError,
    ReminderNotFoundError,
)
from src.infrastructure.storage.sqlite import SQLiteUnitOfWork


@pytest.fixture
def use_case(reminder_store, log_entry_store) -> CompleteReminderUseCase:
    return CompleteReminderUseCase(
        reminder_store=reminder_store,
        log_entry_store=log_entry_store,
        unit_of_work=SQLiteUnitOfWork(),
        timeout=5.0,
    )


class TestCompleteReminderFlow:
    """Completion writes land together or not at all."""

    async def test_complete_without_recreate(
        self, seeded_db, use_case, reminder_store, log_entry_store
    ):
        oil = seeded_db["oil_change"]

        await use_case.execute(oil.id, "Changed oil and filter", date(2024, 6, 1))

        assert (await reminder_store.get(oil.id)).is_completed is True
        reminders = await reminder_store.list_all()
        assert len(reminders) == 2

        entries = await log_entry_store.list_all()
        assert len(entries) == 1
        entry = entries[0]
        assert entry.description == "Changed oil and filter"
        assert entry.date == date(2024, 6, 1)
        assert entry.type == "Maintenance"
        assert entry.reminder_id == oil.id
        assert entry.vehicle.id == seeded_db["vehicle"].id

    async def test_complete_with_recreate(self, seeded_db, use_case, reminder_store):
        oil = seeded_db["oil_change"]
        next_due = date.today() + timedelta(days=180)

        await use_case.execute(
            oil.id, "Changed oil", date.today(), recreate=True, new_due_date=next_due
        )

        open_reminders = await reminder_store.list_all(include_completed=False)
        successor = next(r for r in open_reminders if r.description == "Oil Change")
        assert successor.id != oil.id
        assert successor.due_date == next_due
        assert successor.type == "Maintenance"
        assert successor.due_speedometer_reading is None
        assert len(await reminder_store.list_all()) == 3

    async def test_unknown_reminder(self, sqlite_pool, use_case, log_entry_store):
        with pytest.raises(ReminderNotFoundError):
            await use_case.execute(999, "Nothing", date.today())
        assert await log_entry_store.list_all() == []

    async def test_second_completion_is_rejected(self, seeded_db, use_case, log_entry_store):
        oil = seeded_db["oil_change"]
        await use_case.execute(oil.id, "First", date.today())

        with pytest.raises(ReminderAlreadyCompletedError):
            await use_case.execute(oil.id, "Second", date.today())

        assert [e.description for e in await log_entry_store.list_all()] == ["First"]

    async def test_concurrent_completions_have_one_winner(
        self, seeded_db, use_case, reminder_store, log_entry_store
    ):
        oil = seeded_db["oil_change"]

        results = await asyncio.gather(
            use_case.execute(oil.id, "Run A", date.today(), recreate=True,
                             new_due_date=date.today() + timedelta(days=90)),
            use_case.execute(oil.id, "Run B", date.today(), recreate=True,
                             new_due_date=date.today() + timedelta(days=90)),
            return_exceptions=True,
        )

        winners = [r for r in results if r is None]
        losers = [r for r in results if isinstance(r, ReminderAlreadyCompletedError)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert len(await log_entry_store.list_all()) == 1
        assert len(await reminder_store.list_all()) == 3


class TestCompletionRollback:
    """A failure at any step leaves the database as it was."""

    async def test_log_entry_failure_rolls_back_flag(
        self, seeded_db, use_case, reminder_store, log_entry_store
    ):
        oil = seeded_db["oil_change"]

        with patch.object(
            log_entry_store,
            "add",
            AsyncMock(side_effect=DatabaseError("log_entry_add", "disk full")),
        ):
            with pytest.raises(ReminderCompletionError) as exc_info:
                await use_case.execute(oil.id, "Changed oil", date.today())

        assert exc_info.value.details["step"] == "add_log_entry"
        assert (await reminder_store.get(oil.id)).is_completed is False
        assert await log_entry_store.list_all() == []

    async def test_successor_failure_rolls_back_everything(
        self, seeded_db, use_case, reminder_store, log_entry_store
    ):
        oil = seeded_db["oil_change"]

        with patch.object(
            reminder_store,
            "add",
            AsyncMock(side_effect=DatabaseError("reminder_add", "constraint failed")),
        ):
            with pytest.raises(ReminderCompletionError) as exc_info:
                await use_case.execute(
                    oil.id, "Changed oil", date.today(),
                    recreate=True, new_due_date=date.today(),
                )

        assert exc_info.value.details["step"] == "add_successor"
        assert (await reminder_store.get(oil.id)).is_completed is False
        assert await log_entry_store.list_all() == []
        assert len(await reminder_store.list_all()) == 2

    async def test_commit_failure_rolls_back(
        self, seeded_db, use_case, reminder_store, log_entry_store
    ):
        oil = seeded_db["oil_change"]
        failing_commit = AsyncMock(side_effect=sqlite3.OperationalError("disk I/O error"))

        with patch.object(aiosqlite.Connection, "commit", failing_commit):
            with pytest.raises(ReminderCompletionError) as exc_info:
                await use_case.execute(
                    oil.id, "Changed oil", date.today(),
                    recreate=True, new_due_date=date.today(),
                )

        assert exc_info.value.details["step"] == "commit"
        assert (await reminder_store.get(oil.id)).is_completed is False
        assert await log_entry_store.list_all() == []
        assert len(await reminder_store.list_all()) == 2

    async def test_timeout_rolls_back(
        self, seeded_db, reminder_store, log_entry_store
    ):
        oil = seeded_db["oil_change"]

        async def stalled(entry):
            await asyncio.sleep(5)
            return entry

        use_case = CompleteReminderUseCase(
            reminder_store=reminder_store,
            log_entry_store=log_entry_store,
            unit_of_work=SQLiteUnitOfWork(),
            timeout=0.2,
        )
        with patch.object(log_entry_store, "add", AsyncMock(side_effect=stalled)):
            with pytest.raises(OperationTimeoutError):
                await use_case.execute(oil.id, "Changed oil", date.today())

        assert (await reminder_store.get(oil.id)).is_completed is False

        # The pool is usable again after the rollback
        await use_case.execute(oil.id, "Changed oil", date.today())
        assert (await reminder_store.get(oil.id)).is_completed is True


class TestEditRacingCompletion:
    async def test_stale_edit_after_completion_is_rejected(
        self, seeded_db, use_case, reminder_store
    ):
        oil_id = seeded_db["oil_change"].id
        stale = await reminder_store.get(oil_id)

        await use_case.execute(oil_id, "Changed oil", date.today())

        with pytest.raises(ReminderAlreadyCompletedError):
            await reminder_store.update(stale)
        assert (await reminder_store.get(oil_id)).is_completed is True
        with pytest.raises(ReminderAlreadyCompletedError):
            await use_case.execute(oil_id, "Again", date.today())
