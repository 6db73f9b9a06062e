"""
SQLite implementation of maintenance log storage.

All reads join the owning vehicle so LogEntry.vehicle is populated.
"""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.log_entry import LogEntry
from src.core.interfaces.storage import ILogEntryStore
from src.core.validation import require_entity, require_positive_id
from src.infrastructure.storage.sqlite.connection import (
    database_errors,
    get_connection,
    get_transaction,
)
from src.infrastructure.storage.sqlite.rows import (
    VEHICLE_JOIN_COLUMNS,
    joined_vehicle,
    parse_date,
    parse_datetime,
)

logger = get_logger(__name__)

_SELECT_WITH_VEHICLE = f"""
    SELECT le.*, {VEHICLE_JOIN_COLUMNS}
    FROM log_entries le
    JOIN vehicles v ON v.id = le.vehicle_id
"""


class SQLiteLogEntryStore(ILogEntryStore):
    """SQLite implementation of log entry storage."""

    async def list_all(self) -> list[LogEntry]:
        """List all log entries, newest first."""
        with database_errors("log_entry_list"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    _SELECT_WITH_VEHICLE + " ORDER BY le.date DESC, le.id DESC"
                )
                rows = await cursor.fetchall()
                return [self._row_to_entity(row) for row in rows]

    async def get(self, log_entry_id: int) -> LogEntry | None:
        """Get log entry by ID."""
        require_positive_id("log_entry_id", log_entry_id)
        with database_errors("log_entry_get"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    _SELECT_WITH_VEHICLE + " WHERE le.id = ?", (log_entry_id,)
                )
                row = await cursor.fetchone()
                if row is None:
                    return None
                return self._row_to_entity(row)

    async def list_by_vehicle(self, vehicle_id: int) -> list[LogEntry]:
        """List log entries for one vehicle, newest first."""
        require_positive_id("vehicle_id", vehicle_id)
        with database_errors("log_entry_list_by_vehicle"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    _SELECT_WITH_VEHICLE
                    + " WHERE le.vehicle_id = ? ORDER BY le.date DESC, le.id DESC",
                    (vehicle_id,),
                )
                rows = await cursor.fetchall()
                return [self._row_to_entity(row) for row in rows]

    async def add(self, entry: LogEntry) -> LogEntry:
        """Create a new log entry."""
        require_entity("log_entry", entry)
        entry.created_at = datetime.utcnow()
        with database_errors("log_entry_add"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO log_entries (
                        vehicle_id, date, description, cost, type,
                        notes, speedometer_reading, reminder_id, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        entry.vehicle_id,
                        entry.date.isoformat() if entry.date else None,
                        entry.description,
                        entry.cost,
                        entry.type,
                        entry.notes,
                        entry.speedometer_reading,
                        entry.reminder_id,
                        entry.created_at.isoformat(),
                    ),
                )
                entry.id = cursor.lastrowid
                logger.info(
                    "log_entry_added",
                    log_entry_id=entry.id,
                    vehicle_id=entry.vehicle_id,
                    reminder_id=entry.reminder_id,
                )
                return entry

    async def update(self, entry: LogEntry) -> LogEntry:
        """Update an existing log entry."""
        require_entity("log_entry", entry)
        require_positive_id("log_entry_id", entry.id)
        with database_errors("log_entry_update"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE log_entries SET
                        vehicle_id = ?, date = ?, description = ?,
                        cost = ?, type = ?, notes = ?,
                        speedometer_reading = ?, reminder_id = ?
                    WHERE id = ?
                    """,
                    (
                        entry.vehicle_id,
                        entry.date.isoformat() if entry.date else None,
                        entry.description,
                        entry.cost,
                        entry.type,
                        entry.notes,
                        entry.speedometer_reading,
                        entry.reminder_id,
                        entry.id,
                    ),
                )
                logger.info("log_entry_updated", log_entry_id=entry.id)
                return entry

    async def delete(self, log_entry_id: int) -> bool:
        """Delete a log entry by ID."""
        require_positive_id("log_entry_id", log_entry_id)
        with database_errors("log_entry_delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM log_entries WHERE id = ?", (log_entry_id,)
                )
                deleted = cursor.rowcount > 0
                if deleted:
                    logger.info("log_entry_deleted", log_entry_id=log_entry_id)
                return deleted

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> LogEntry:
        """Convert a joined database row to a LogEntry entity."""
        return LogEntry(
            id=row["id"],
            vehicle_id=row["vehicle_id"],
            date=parse_date(row["date"]),
            description=row["description"],
            cost=float(row["cost"] or 0.0),
            type=row["type"] or "",
            notes=row["notes"],
            speedometer_reading=row["speedometer_reading"],
            reminder_id=row["reminder_id"],
            vehicle=joined_vehicle(row),
            created_at=parse_datetime(row["created_at"]),
        )
