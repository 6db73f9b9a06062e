"""Vehicle domain entity."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class SpeedometerType(str, Enum):
    """Unit the vehicle's odometer counts in."""

    NONE = "none"
    KM = "km"
    HOURS = "hours"


class Vehicle(BaseModel):
    """
    A registered vehicle.

    Root aggregate for its reminders and log entries: deleting a vehicle
    removes both.
    """

    id: int | None = None
    make: str
    model: str
    year: int
    registration: str = ""
    speedometer_type: SpeedometerType = SpeedometerType.NONE
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        """Human-readable label, e.g. '2020 Toyota Corolla'."""
        return f"{self.year} {self.make} {self.model}"
