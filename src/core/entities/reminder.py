"""Reminder entity for upcoming vehicle maintenance."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from src.core.entities.vehicle import Vehicle


class Reminder(BaseModel):
    """
    Scheduled maintenance obligation for a vehicle.

    Once is_completed is set the reminder is terminal; the next
    occurrence of the same task is a new reminder.
    """

    id: int | None = None
    vehicle_id: int
    description: str
    due_date: date
    type: str = ""  # e.g. Repair, Maintenance
    is_completed: bool = False
    due_speedometer_reading: float | None = None
    vehicle: Vehicle | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_overdue(self) -> bool:
        """Check if the reminder is past due and not completed."""
        if self.is_completed:
            return False
        return self.due_date < date.today()
