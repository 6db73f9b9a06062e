"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CompleteReminderRequest,
    CreateLogEntryRequest,
    CreateReminderRequest,
    CreateVehicleRequest,
    UpdateLogEntryRequest,
    UpdateReminderRequest,
    UpdateVehicleRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    LogEntryListResponse,
    LogEntryResponse,
    ProviderHealthResponse,
    ReminderListResponse,
    ReminderResponse,
    VehicleListResponse,
    VehicleResponse,
)

__all__ = [
    # Requests
    "CreateVehicleRequest",
    "UpdateVehicleRequest",
    "CreateLogEntryRequest",
    "UpdateLogEntryRequest",
    "CreateReminderRequest",
    "UpdateReminderRequest",
    "CompleteReminderRequest",
    # Responses
    "VehicleResponse",
    "VehicleListResponse",
    "LogEntryResponse",
    "LogEntryListResponse",
    "ReminderResponse",
    "ReminderListResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
