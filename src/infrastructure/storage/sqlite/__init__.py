"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    database_errors,
    get_connection,
    get_pool,
    get_transaction,
    in_transaction,
)
from src.infrastructure.storage.sqlite.log_entry_store import SQLiteLogEntryStore
from src.infrastructure.storage.sqlite.reminder_store import SQLiteReminderStore
from src.infrastructure.storage.sqlite.unit_of_work import SQLiteUnitOfWork
from src.infrastructure.storage.sqlite.vehicle_store import SQLiteVehicleStore

# Aliases used by the API lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_vehicle_store: SQLiteVehicleStore | None = None
_log_entry_store: SQLiteLogEntryStore | None = None
_reminder_store: SQLiteReminderStore | None = None
_unit_of_work: SQLiteUnitOfWork | None = None


async def get_vehicle_store() -> SQLiteVehicleStore:
    """Get singleton vehicle store instance."""
    global _vehicle_store
    if _vehicle_store is None:
        _vehicle_store = SQLiteVehicleStore()
    return _vehicle_store


async def get_log_entry_store() -> SQLiteLogEntryStore:
    """Get singleton log entry store instance."""
    global _log_entry_store
    if _log_entry_store is None:
        _log_entry_store = SQLiteLogEntryStore()
    return _log_entry_store


async def get_reminder_store() -> SQLiteReminderStore:
    """Get singleton reminder store instance."""
    global _reminder_store
    if _reminder_store is None:
        _reminder_store = SQLiteReminderStore()
    return _reminder_store


async def get_unit_of_work() -> SQLiteUnitOfWork:
    """Get singleton unit of work instance."""
    global _unit_of_work
    if _unit_of_work is None:
        _unit_of_work = SQLiteUnitOfWork()
    return _unit_of_work


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "in_transaction",
    "database_errors",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteVehicleStore",
    "SQLiteLogEntryStore",
    "SQLiteReminderStore",
    "SQLiteUnitOfWork",
    # Factory functions
    "get_vehicle_store",
    "get_log_entry_store",
    "get_reminder_store",
    "get_unit_of_work",
]
