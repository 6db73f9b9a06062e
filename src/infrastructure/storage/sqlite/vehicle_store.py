"""SQLite implementation of vehicle storage."""

from datetime import datetime

from src.config import get_logger
from src.core.entities.vehicle import Vehicle
from src.core.interfaces.storage import IVehicleStore
from src.core.validation import require_entity, require_positive_id
from src.infrastructure.storage.sqlite.connection import (
    database_errors,
    get_connection,
    get_transaction,
)
from src.infrastructure.storage.sqlite.rows import row_to_vehicle

logger = get_logger(__name__)


class SQLiteVehicleStore(IVehicleStore):
    """SQLite implementation of vehicle storage."""

    async def list_all(self) -> list[Vehicle]:
        """List all vehicles."""
        with database_errors("vehicle_list"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM vehicles ORDER BY make, model, year"
                )
                rows = await cursor.fetchall()
                return [row_to_vehicle(row) for row in rows]

    async def get(self, vehicle_id: int) -> Vehicle | None:
        """Get vehicle by ID."""
        require_positive_id("vehicle_id", vehicle_id)
        with database_errors("vehicle_get"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM vehicles WHERE id = ?", (vehicle_id,)
                )
                row = await cursor.fetchone()
                if row is None:
                    return None
                return row_to_vehicle(row)

    async def add(self, vehicle: Vehicle) -> Vehicle:
        """Create a new vehicle."""
        require_entity("vehicle", vehicle)
        now = datetime.utcnow()
        vehicle.created_at = now
        vehicle.updated_at = now
        with database_errors("vehicle_add"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO vehicles (
                        make, model, year, registration, speedometer_type,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        vehicle.make,
                        vehicle.model,
                        vehicle.year,
                        vehicle.registration,
                        vehicle.speedometer_type.value,
                        vehicle.created_at.isoformat(),
                        vehicle.updated_at.isoformat(),
                    ),
                )
                vehicle.id = cursor.lastrowid
                logger.info(
                    "vehicle_added",
                    vehicle_id=vehicle.id,
                    registration=vehicle.registration,
                )
                return vehicle

    async def update(self, vehicle: Vehicle) -> Vehicle:
        """Update an existing vehicle."""
        require_entity("vehicle", vehicle)
        require_positive_id("vehicle_id", vehicle.id)
        vehicle.updated_at = datetime.utcnow()
        with database_errors("vehicle_update"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE vehicles SET
                        make = ?, model = ?, year = ?,
                        registration = ?, speedometer_type = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        vehicle.make,
                        vehicle.model,
                        vehicle.year,
                        vehicle.registration,
                        vehicle.speedometer_type.value,
                        vehicle.updated_at.isoformat(),
                        vehicle.id,
                    ),
                )
                logger.info("vehicle_updated", vehicle_id=vehicle.id)
                return vehicle

    async def delete(self, vehicle_id: int) -> bool:
        """Delete a vehicle by ID; reminders and log entries cascade."""
        require_positive_id("vehicle_id", vehicle_id)
        with database_errors("vehicle_delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM vehicles WHERE id = ?", (vehicle_id,)
                )
                deleted = cursor.rowcount > 0
                if deleted:
                    logger.info("vehicle_deleted", vehicle_id=vehicle_id)
                return deleted
