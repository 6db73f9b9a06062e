"""Row decoding helpers shared by the SQLite stores."""

from datetime import date, datetime

import aiosqlite

from src.core.entities.vehicle import SpeedometerType, Vehicle

# Columns selected from `vehicles v` when a reminder or log entry query
# eager-loads its vehicle. The vehicle id comes from the child row.
VEHICLE_JOIN_COLUMNS = """
    v.make AS vehicle_make,
    v.model AS vehicle_model,
    v.year AS vehicle_year,
    v.registration AS vehicle_registration,
    v.speedometer_type AS vehicle_speedometer_type,
    v.created_at AS vehicle_created_at,
    v.updated_at AS vehicle_updated_at
"""


def parse_datetime(value: str | None) -> datetime:
    """Parse an ISO timestamp column, defaulting to now when unreadable."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()


def parse_date(value: str | None) -> date | None:
    """Parse an ISO date column; None when empty or unreadable."""
    if value:
        try:
            return date.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return None


def row_to_vehicle(row: aiosqlite.Row) -> Vehicle:
    """Convert a `vehicles` row to a Vehicle entity."""
    return Vehicle(
        id=row["id"],
        make=row["make"],
        model=row["model"],
        year=row["year"],
        registration=row["registration"] or "",
        speedometer_type=SpeedometerType(row["speedometer_type"] or "none"),
        created_at=parse_datetime(row["created_at"]),
        updated_at=parse_datetime(row["updated_at"]),
    )


def joined_vehicle(row: aiosqlite.Row) -> Vehicle:
    """Build the eager-loaded Vehicle from VEHICLE_JOIN_COLUMNS."""
    return Vehicle(
        id=row["vehicle_id"],
        make=row["vehicle_make"],
        model=row["vehicle_model"],
        year=row["vehicle_year"],
        registration=row["vehicle_registration"] or "",
        speedometer_type=SpeedometerType(row["vehicle_speedometer_type"] or "none"),
        created_at=parse_datetime(row["vehicle_created_at"]),
        updated_at=parse_datetime(row["vehicle_updated_at"]),
    )
