"""Log entry entity for maintenance history."""

import datetime as dt

from pydantic import BaseModel, Field

from src.core.entities.vehicle import Vehicle


class LogEntry(BaseModel):
    """
    Historical record of repair or maintenance work on a vehicle.

    Entries created by completing a reminder keep a reference to that
    reminder in reminder_id; entries typed in by hand leave it empty.
    """

    id: int | None = None
    vehicle_id: int
    date: dt.date | None = None
    description: str
    cost: float = 0.0
    type: str = ""  # e.g. Repair, Maintenance
    notes: str | None = None
    speedometer_reading: float | None = None  # km or hours, per vehicle
    reminder_id: int | None = None
    vehicle: Vehicle | None = None
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)
