"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

import datetime as dt
from typing import Any, ClassVar

from pydantic import BaseModel, Field, model_validator

from src.core.entities.vehicle import SpeedometerType


class PartialUpdateRequest(BaseModel):
    """
    Base for PUT bodies: omitted fields are left unchanged.

    Fields listed in NULLABLE may be sent as null to clear them; any other
    field sent as null is rejected.
    """

    NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required(self) -> "PartialUpdateRequest":
        for field in sorted(self.model_fields_set - self.NULLABLE):
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields the client sent, including explicit nulls."""
        return self.model_dump(exclude_unset=True)


# --- Vehicles ---


class CreateVehicleRequest(BaseModel):
    """Request to register a vehicle."""

    make: str = Field(..., min_length=1, description="Manufacturer", examples=["Toyota"])
    model: str = Field(..., min_length=1, description="Model name", examples=["Corolla"])
    year: int = Field(..., ge=1886, le=2100, description="Model year", examples=[2020])
    registration: str = Field(default="", description="Registration plate", examples=["ABC123"])
    speedometer_type: SpeedometerType = Field(
        default=SpeedometerType.NONE,
        description="Odometer unit: none, km or hours",
    )


class UpdateVehicleRequest(PartialUpdateRequest):
    """Request to update a vehicle. Omitted fields are left unchanged."""

    make: str | None = Field(default=None, min_length=1)
    model: str | None = Field(default=None, min_length=1)
    year: int | None = Field(default=None, ge=1886, le=2100)
    registration: str | None = None
    speedometer_type: SpeedometerType | None = None


# --- Log Entries ---


class CreateLogEntryRequest(BaseModel):
    """Request to record completed work on a vehicle."""

    vehicle_id: int = Field(..., gt=0, description="Owning vehicle")
    date: dt.date | None = Field(default=None, description="Date the work was done")
    description: str = Field(..., min_length=1, description="What was done")
    cost: float = Field(default=0.0, ge=0, description="Cost of the work")
    type: str = Field(default="", description="Category, e.g. Repair or Maintenance")
    notes: str | None = Field(default=None, description="Free-form notes")
    speedometer_reading: float | None = Field(
        default=None, ge=0, description="Odometer reading at the time of work"
    )


class UpdateLogEntryRequest(PartialUpdateRequest):
    """Request to update a log entry. Omitted fields are left unchanged."""

    NULLABLE: ClassVar[frozenset[str]] = frozenset({"date", "notes", "speedometer_reading"})

    date: dt.date | None = None
    description: str | None = Field(default=None, min_length=1)
    cost: float | None = Field(default=None, ge=0)
    type: str | None = None
    notes: str | None = None
    speedometer_reading: float | None = Field(default=None, ge=0)


# --- Reminders ---


class CreateReminderRequest(BaseModel):
    """Request to schedule a reminder."""

    vehicle_id: int = Field(..., gt=0, description="Owning vehicle")
    description: str = Field(..., min_length=1, description="Work to be done")
    due_date: dt.date = Field(..., description="Due date (YYYY-MM-DD)")
    type: str = Field(default="", description="Category, e.g. Repair or Maintenance")
    due_speedometer_reading: float | None = Field(
        default=None, ge=0, description="Odometer reading at which the work is due"
    )


class UpdateReminderRequest(PartialUpdateRequest):
    """Request to update an open reminder. Completion goes through /complete."""

    NULLABLE: ClassVar[frozenset[str]] = frozenset({"due_speedometer_reading"})

    description: str | None = Field(default=None, min_length=1)
    due_date: dt.date | None = None
    type: str | None = None
    due_speedometer_reading: float | None = Field(default=None, ge=0)


class CompleteReminderRequest(BaseModel):
    """Request to complete a reminder.

    Description and date are checked by the completion use case so that
    blank values are reported the same way for API and direct callers.
    """

    log_description: str = Field(
        default="",
        description="Description for the log entry written on completion",
        examples=["Oil changed"],
    )
    log_date: dt.date | None = Field(default=None, description="Date the work was done")
    recreate: bool = Field(
        default=False,
        description="Schedule the next occurrence as a new reminder",
    )
    new_due_date: dt.date | None = Field(
        default=None,
        description="Due date of the next occurrence; required when recreate is set",
    )
