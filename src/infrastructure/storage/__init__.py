"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteLogEntryStore,
    SQLiteReminderStore,
    SQLiteUnitOfWork,
    SQLiteVehicleStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteVehicleStore",
    "SQLiteLogEntryStore",
    "SQLiteReminderStore",
    "SQLiteUnitOfWork",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
