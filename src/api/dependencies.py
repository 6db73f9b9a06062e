"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers.
"""

from src.application.use_cases import CompleteReminderUseCase
from src.infrastructure.storage.sqlite import (
    SQLiteLogEntryStore,
    SQLiteReminderStore,
    SQLiteVehicleStore,
    get_log_entry_store,
    get_reminder_store,
    get_unit_of_work,
    get_vehicle_store,
)


# Store dependencies
async def get_veh_store() -> SQLiteVehicleStore:
    """Get vehicle store."""
    return await get_vehicle_store()


async def get_log_store() -> SQLiteLogEntryStore:
    """Get log entry store."""
    return await get_log_entry_store()


async def get_rem_store() -> SQLiteReminderStore:
    """Get reminder store."""
    return await get_reminder_store()


# Use case dependencies
async def get_complete_reminder_use_case() -> CompleteReminderUseCase:
    """Get complete reminder use case wired to the SQLite stores."""
    return CompleteReminderUseCase(
        reminder_store=await get_reminder_store(),
        log_entry_store=await get_log_entry_store(),
        unit_of_work=await get_unit_of_work(),
    )
