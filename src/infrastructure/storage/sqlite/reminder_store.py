"""
SQLite implementation of reminder storage.

Handles CRUD, per-vehicle listing, eager vehicle loading and the guarded
completion transition used by the reminder workflow.
"""

from datetime import date, datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.reminder import Reminder
from src.core.exceptions import ReminderAlreadyCompletedError, ReminderNotFoundError
from src.core.interfaces.storage import IReminderStore
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
    SELECT r.*, {VEHICLE_JOIN_COLUMNS}
    FROM reminders r
    JOIN vehicles v ON v.id = r.vehicle_id
"""


class SQLiteReminderStore(IReminderStore):
    """SQLite implementation of reminder storage."""

    async def list_all(self, include_completed: bool = True) -> list[Reminder]:
        """List reminders ordered by due date."""
        query = "SELECT * FROM reminders"
        if not include_completed:
            query += " WHERE is_completed = 0"
        query += " ORDER BY due_date ASC, id ASC"

        with database_errors("reminder_list"):
            async with get_connection() as conn:
                cursor = await conn.execute(query)
                rows = await cursor.fetchall()
                return [self._row_to_entity(row) for row in rows]

    async def list_all_with_vehicle(
        self, include_completed: bool = True
    ) -> list[Reminder]:
        """List reminders with their vehicles, ordered by due date."""
        query = _SELECT_WITH_VEHICLE
        if not include_completed:
            query += " WHERE r.is_completed = 0"
        query += " ORDER BY r.due_date ASC, r.id ASC"

        with database_errors("reminder_list_with_vehicle"):
            async with get_connection() as conn:
                cursor = await conn.execute(query)
                rows = await cursor.fetchall()
                return [self._row_to_entity(row, with_vehicle=True) for row in rows]

    async def get(
        self, reminder_id: int, with_vehicle: bool = False
    ) -> Reminder | None:
        """Get reminder by ID."""
        require_positive_id("reminder_id", reminder_id)
        if with_vehicle:
            query = _SELECT_WITH_VEHICLE + " WHERE r.id = ?"
        else:
            query = "SELECT * FROM reminders WHERE id = ?"

        with database_errors("reminder_get"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, (reminder_id,))
                row = await cursor.fetchone()
                if row is None:
                    return None
                return self._row_to_entity(row, with_vehicle=with_vehicle)

    async def list_by_vehicle(self, vehicle_id: int) -> list[Reminder]:
        """List reminders for one vehicle, ordered by due date."""
        require_positive_id("vehicle_id", vehicle_id)
        with database_errors("reminder_list_by_vehicle"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM reminders
                    WHERE vehicle_id = ?
                    ORDER BY due_date ASC, id ASC
                    """,
                    (vehicle_id,),
                )
                rows = await cursor.fetchall()
                return [self._row_to_entity(row) for row in rows]

    async def add(self, reminder: Reminder) -> Reminder:
        """Create a new reminder."""
        require_entity("reminder", reminder)
        now = datetime.utcnow()
        reminder.created_at = now
        reminder.updated_at = now
        with database_errors("reminder_add"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO reminders (
                        vehicle_id, description, due_date, type,
                        is_completed, due_speedometer_reading,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        reminder.vehicle_id,
                        reminder.description,
                        reminder.due_date.isoformat(),
                        reminder.type,
                        1 if reminder.is_completed else 0,
                        reminder.due_speedometer_reading,
                        reminder.created_at.isoformat(),
                        reminder.updated_at.isoformat(),
                    ),
                )
                reminder.id = cursor.lastrowid
                logger.info(
                    "reminder_added",
                    reminder_id=reminder.id,
                    vehicle_id=reminder.vehicle_id,
                    type=reminder.type,
                )
                return reminder

    async def update(self, reminder: Reminder) -> Reminder:
        """
        Update an open reminder.

        is_completed is never written here; mark_completed owns it.

        Raises:
            ReminderNotFoundError: No reminder with that id
            ReminderAlreadyCompletedError: The stored reminder is completed
        """
        require_entity("reminder", reminder)
        require_positive_id("reminder_id", reminder.id)
        reminder.updated_at = datetime.utcnow()
        with database_errors("reminder_update"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE reminders SET
                        vehicle_id = ?, description = ?, due_date = ?,
                        type = ?, due_speedometer_reading = ?, updated_at = ?
                    WHERE id = ? AND is_completed = 0
                    """,
                    (
                        reminder.vehicle_id,
                        reminder.description,
                        reminder.due_date.isoformat(),
                        reminder.type,
                        reminder.due_speedometer_reading,
                        reminder.updated_at.isoformat(),
                        reminder.id,
                    ),
                )
                if cursor.rowcount == 0:
                    cursor = await conn.execute(
                        "SELECT 1 FROM reminders WHERE id = ?", (reminder.id,)
                    )
                    if await cursor.fetchone() is None:
                        raise ReminderNotFoundError(reminder.id)
                    raise ReminderAlreadyCompletedError(reminder.id)
                logger.info("reminder_updated", reminder_id=reminder.id)
                return reminder

    async def delete(self, reminder_id: int) -> bool:
        """Delete a reminder by ID."""
        require_positive_id("reminder_id", reminder_id)
        with database_errors("reminder_delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM reminders WHERE id = ?", (reminder_id,)
                )
                deleted = cursor.rowcount > 0
                if deleted:
                    logger.info("reminder_deleted", reminder_id=reminder_id)
                return deleted

    async def mark_completed(self, reminder_id: int) -> bool:
        """Complete a reminder only if it is still open."""
        require_positive_id("reminder_id", reminder_id)
        with database_errors("reminder_mark_completed"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE reminders SET is_completed = 1, updated_at = ?
                    WHERE id = ? AND is_completed = 0
                    """,
                    (datetime.utcnow().isoformat(), reminder_id),
                )
                transitioned = cursor.rowcount == 1
                logger.info(
                    "reminder_marked_completed",
                    reminder_id=reminder_id,
                    transitioned=transitioned,
                )
                return transitioned

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row, with_vehicle: bool = False) -> Reminder:
        """Convert a database row to a Reminder entity."""
        return Reminder(
            id=row["id"],
            vehicle_id=row["vehicle_id"],
            description=row["description"],
            due_date=parse_date(row["due_date"]) or date.today(),
            type=row["type"] or "",
            is_completed=bool(row["is_completed"]),
            due_speedometer_reading=row["due_speedometer_reading"],
            vehicle=joined_vehicle(row) if with_vehicle else None,
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
