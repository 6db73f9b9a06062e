"""
Abstract interfaces for storage providers.

Defines contracts for the vehicle, log entry and reminder stores and for
the unit of work that groups several store calls into one transaction.

Every id-taking method rejects non-positive ids with ValidationError
before touching storage, and add/update reject a missing entity the same
way. delete is a no-op (returning False) when the id does not exist.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from src.core.entities.log_entry import LogEntry
from src.core.entities.reminder import Reminder
from src.core.entities.vehicle import Vehicle


class IVehicleStore(ABC):
    """Abstract interface for vehicle storage."""

    @abstractmethod
    async def list_all(self) -> list[Vehicle]:
        """List all vehicles."""
        pass

    @abstractmethod
    async def get(self, vehicle_id: int) -> Vehicle | None:
        """Get vehicle by ID."""
        pass

    @abstractmethod
    async def add(self, vehicle: Vehicle) -> Vehicle:
        """Persist a new vehicle and assign its ID."""
        pass

    @abstractmethod
    async def update(self, vehicle: Vehicle) -> Vehicle:
        """Overwrite the stored fields of an existing vehicle."""
        pass

    @abstractmethod
    async def delete(self, vehicle_id: int) -> bool:
        """Delete a vehicle with its reminders and log entries."""
        pass


class ILogEntryStore(ABC):
    """
    Abstract interface for maintenance log storage.

    Reads populate LogEntry.vehicle.
    """

    @abstractmethod
    async def list_all(self) -> list[LogEntry]:
        """List all log entries, newest first."""
        pass

    @abstractmethod
    async def get(self, log_entry_id: int) -> LogEntry | None:
        """Get log entry by ID."""
        pass

    @abstractmethod
    async def list_by_vehicle(self, vehicle_id: int) -> list[LogEntry]:
        """List log entries for one vehicle, newest first."""
        pass

    @abstractmethod
    async def add(self, entry: LogEntry) -> LogEntry:
        """Persist a new log entry and assign its ID."""
        pass

    @abstractmethod
    async def update(self, entry: LogEntry) -> LogEntry:
        """Overwrite the stored fields of an existing log entry."""
        pass

    @abstractmethod
    async def delete(self, log_entry_id: int) -> bool:
        """Delete a log entry."""
        pass


class IReminderStore(ABC):
    """Abstract interface for reminder storage."""

    @abstractmethod
    async def list_all(self, include_completed: bool = True) -> list[Reminder]:
        """List reminders ordered by due date."""
        pass

    @abstractmethod
    async def list_all_with_vehicle(
        self, include_completed: bool = True
    ) -> list[Reminder]:
        """List reminders with Reminder.vehicle populated."""
        pass

    @abstractmethod
    async def get(
        self, reminder_id: int, with_vehicle: bool = False
    ) -> Reminder | None:
        """Get reminder by ID, optionally with its vehicle."""
        pass

    @abstractmethod
    async def list_by_vehicle(self, vehicle_id: int) -> list[Reminder]:
        """List reminders for one vehicle."""
        pass

    @abstractmethod
    async def add(self, reminder: Reminder) -> Reminder:
        """Persist a new reminder and assign its ID."""
        pass

    @abstractmethod
    async def update(self, reminder: Reminder) -> Reminder:
        """
        Overwrite the editable fields of an open reminder.

        Never changes is_completed. Raises ReminderAlreadyCompletedError if
        the stored reminder is completed, even when the passed copy is not.
        """
        pass

    @abstractmethod
    async def delete(self, reminder_id: int) -> bool:
        """Delete a reminder."""
        pass

    @abstractmethod
    async def mark_completed(self, reminder_id: int) -> bool:
        """
        Flip is_completed from false to true.

        Returns True only if this call made the transition; False when the
        reminder is missing or was already completed.
        """
        pass


class IUnitOfWork(ABC):
    """
    Groups store calls into a single transaction.

    Usage:
        async with uow.transaction():
            await reminder_store.mark_completed(...)
            await log_store.add(...)
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Commit on clean exit, roll back on any exception."""
        pass
