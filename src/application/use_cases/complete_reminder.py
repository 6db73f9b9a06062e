"""Complete Reminder Use Case: close a reminder and record the work done."""

import asyncio
import datetime as dt
from collections.abc import Awaitable
from typing import TypeVar

from src.config import get_logger, get_settings
from src.core.entities import LogEntry, Reminder
from src.core.exceptions import (
    OperationTimeoutError,
    ReminderAlreadyCompletedError,
    ReminderCompletionError,
    ReminderNotFoundError,
    StorageError,
    ValidationError,
)
from src.core.interfaces.storage import ILogEntryStore, IReminderStore, IUnitOfWork
from src.core.validation import require_positive_id, require_text

logger = get_logger(__name__)

T = TypeVar("T")


class CompleteReminderUseCase:
    """
    Complete a reminder, log the work and optionally schedule the next one.

    All writes happen inside one unit-of-work transaction: either the
    reminder is completed, the log entry written and the successor added,
    or none of it is visible.
    """

    def __init__(
        self,
        reminder_store: IReminderStore | None = None,
        log_entry_store: ILogEntryStore | None = None,
        unit_of_work: IUnitOfWork | None = None,
        timeout: float | None = None,
    ):
        self._reminder_store = reminder_store
        self._log_entry_store = log_entry_store
        self._unit_of_work = unit_of_work
        self._timeout = (
            timeout if timeout is not None else get_settings().workflow.completion_timeout
        )

    async def _get_reminder_store(self) -> IReminderStore:
        if self._reminder_store is None:
            from src.infrastructure.storage.sqlite import get_reminder_store

            self._reminder_store = await get_reminder_store()
        return self._reminder_store

    async def _get_log_entry_store(self) -> ILogEntryStore:
        if self._log_entry_store is None:
            from src.infrastructure.storage.sqlite import get_log_entry_store

            self._log_entry_store = await get_log_entry_store()
        return self._log_entry_store

    async def _get_unit_of_work(self) -> IUnitOfWork:
        if self._unit_of_work is None:
            from src.infrastructure.storage.sqlite import get_unit_of_work

            self._unit_of_work = await get_unit_of_work()
        return self._unit_of_work

    async def execute(
        self,
        reminder_id: int,
        log_description: str,
        log_date: dt.date | None,
        recreate: bool = False,
        new_due_date: dt.date | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Execute the completion workflow.

        Args:
            reminder_id: Reminder to complete
            log_description: Description of the log entry to write
            log_date: Date the work was done
            recreate: Also schedule a new reminder for the same task
            new_due_date: Due date of the new reminder (only with recreate)
            timeout: Seconds allowed for the whole call (default from settings)

        Raises:
            ValidationError: Bad input; nothing was read or written
            ReminderNotFoundError: No reminder with that id
            ReminderAlreadyCompletedError: Reminder was already completed,
                possibly by a concurrent call
            ReminderCompletionError: A storage step or the commit failed;
                all writes were rolled back
            OperationTimeoutError: Deadline expired; all writes were
                rolled back
        """
        self._validate(reminder_id, log_description, log_date, recreate, new_due_date)

        limit = timeout if timeout is not None else self._timeout

        logger.info(
            "reminder_completion_started",
            reminder_id=reminder_id,
            recreate=recreate,
        )

        try:
            async with asyncio.timeout(limit):
                successor_id = await self._complete(
                    reminder_id, log_description, log_date, recreate, new_due_date
                )
        except TimeoutError as e:
            logger.warning(
                "reminder_completion_timed_out",
                reminder_id=reminder_id,
                timeout=limit,
            )
            raise OperationTimeoutError("complete_reminder", limit) from e
        except ReminderCompletionError as e:
            logger.error(
                "reminder_completion_failed",
                reminder_id=reminder_id,
                step=e.details["step"],
                error=e.details["error"],
            )
            raise

        logger.info(
            "reminder_completed",
            reminder_id=reminder_id,
            successor_id=successor_id,
        )

    @staticmethod
    def _validate(
        reminder_id: int,
        log_description: str,
        log_date: dt.date | None,
        recreate: bool,
        new_due_date: dt.date | None,
    ) -> None:
        require_positive_id("reminder_id", reminder_id)
        require_text("log_description", log_description)
        if log_date is None:
            raise ValidationError("log_date", "is required")
        if recreate and new_due_date is None:
            raise ValidationError(
                "new_due_date", "is required when recreating the reminder"
            )
        if not recreate and new_due_date is not None:
            raise ValidationError(
                "new_due_date",
                "can only be given when recreating the reminder",
                new_due_date,
            )

    async def _complete(
        self,
        reminder_id: int,
        log_description: str,
        log_date: dt.date,
        recreate: bool,
        new_due_date: dt.date | None,
    ) -> int | None:
        """Run the steps inside one transaction; returns the successor id."""
        reminder_store = await self._get_reminder_store()
        log_entry_store = await self._get_log_entry_store()
        unit_of_work = await self._get_unit_of_work()

        try:
            async with unit_of_work.transaction():
                # 1. Load and check state
                reminder = await self._step(
                    reminder_id,
                    "load_reminder",
                    reminder_store.get(reminder_id, with_vehicle=True),
                )
                if reminder is None:
                    raise ReminderNotFoundError(reminder_id)
                if reminder.is_completed:
                    raise ReminderAlreadyCompletedError(reminder_id)

                # 2. Flip the flag; False means another call got there first
                transitioned = await self._step(
                    reminder_id,
                    "mark_completed",
                    reminder_store.mark_completed(reminder_id),
                )
                if not transitioned:
                    raise ReminderAlreadyCompletedError(reminder_id)

                # 3. Record the work
                await self._step(
                    reminder_id,
                    "add_log_entry",
                    log_entry_store.add(
                        LogEntry(
                            vehicle_id=reminder.vehicle_id,
                            description=log_description,
                            date=log_date,
                            type=reminder.type,
                            reminder_id=reminder_id,
                        )
                    ),
                )

                # 4. Schedule the next occurrence
                if not recreate:
                    return None
                successor = await self._step(
                    reminder_id,
                    "add_successor",
                    reminder_store.add(
                        Reminder(
                            vehicle_id=reminder.vehicle_id,
                            description=reminder.description,
                            type=reminder.type,
                            due_date=new_due_date,
                            is_completed=False,
                        )
                    ),
                )
                return successor.id
        except ReminderCompletionError:
            raise
        except StorageError as e:
            # Commit runs when the block exits, outside every _step
            raise ReminderCompletionError(reminder_id, "commit", e.message) from e

    @staticmethod
    async def _step(reminder_id: int, step: str, operation: Awaitable[T]) -> T:
        """Await one storage step, tagging storage failures with the step name."""
        try:
            return await operation
        except ReminderCompletionError:
            raise
        except StorageError as e:
            raise ReminderCompletionError(reminder_id, step, e.message) from e
