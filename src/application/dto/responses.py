"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

import datetime as dt

from pydantic import BaseModel, Field

from src.core.entities import LogEntry, Reminder, Vehicle
from src.core.entities.vehicle import SpeedometerType

# --- Vehicles ---


class VehicleResponse(BaseModel):
    """Vehicle response DTO."""

    id: int
    make: str
    model: str
    year: int
    registration: str = ""
    speedometer_type: SpeedometerType = SpeedometerType.NONE
    display_name: str
    created_at: dt.datetime
    updated_at: dt.datetime

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> "VehicleResponse":
        return cls(
            id=vehicle.id,
            make=vehicle.make,
            model=vehicle.model,
            year=vehicle.year,
            registration=vehicle.registration,
            speedometer_type=vehicle.speedometer_type,
            display_name=vehicle.display_name,
            created_at=vehicle.created_at,
            updated_at=vehicle.updated_at,
        )


class VehicleListResponse(BaseModel):
    """List of vehicles."""

    vehicles: list[VehicleResponse]
    total: int


# --- Log Entries ---


class LogEntryResponse(BaseModel):
    """Log entry response DTO."""

    id: int
    vehicle_id: int
    date: dt.date | None = None
    description: str
    cost: float = 0.0
    type: str = ""
    notes: str | None = None
    speedometer_reading: float | None = None
    reminder_id: int | None = None
    vehicle: VehicleResponse | None = None
    created_at: dt.datetime

    @classmethod
    def from_entity(cls, entry: LogEntry) -> "LogEntryResponse":
        return cls(
            id=entry.id,
            vehicle_id=entry.vehicle_id,
            date=entry.date,
            description=entry.description,
            cost=entry.cost,
            type=entry.type,
            notes=entry.notes,
            speedometer_reading=entry.speedometer_reading,
            reminder_id=entry.reminder_id,
            vehicle=VehicleResponse.from_entity(entry.vehicle) if entry.vehicle else None,
            created_at=entry.created_at,
        )


class LogEntryListResponse(BaseModel):
    """List of log entries."""

    log_entries: list[LogEntryResponse]
    total: int


# --- Reminders ---


class ReminderResponse(BaseModel):
    """Reminder response DTO."""

    id: int
    vehicle_id: int
    description: str
    due_date: dt.date
    type: str = ""
    is_completed: bool = False
    is_overdue: bool = False
    due_speedometer_reading: float | None = None
    vehicle: VehicleResponse | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    @classmethod
    def from_entity(cls, reminder: Reminder) -> "ReminderResponse":
        return cls(
            id=reminder.id,
            vehicle_id=reminder.vehicle_id,
            description=reminder.description,
            due_date=reminder.due_date,
            type=reminder.type,
            is_completed=reminder.is_completed,
            is_overdue=reminder.is_overdue,
            due_speedometer_reading=reminder.due_speedometer_reading,
            vehicle=(
                VehicleResponse.from_entity(reminder.vehicle) if reminder.vehicle else None
            ),
            created_at=reminder.created_at,
            updated_at=reminder.updated_at,
        )


class ReminderListResponse(BaseModel):
    """List of reminders."""

    reminders: list[ReminderResponse]
    total: int


# --- Health & Errors ---


class ProviderHealthResponse(BaseModel):
    """Backing service health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. REMINDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: dt.datetime = Field(default_factory=dt.datetime.now)
