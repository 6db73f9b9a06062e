"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate the stores

Use cases are the only entry point for API handlers that span more than
one store.
"""

from src.application.dto import (
    CompleteReminderRequest,
    CreateLogEntryRequest,
    CreateReminderRequest,
    CreateVehicleRequest,
    ErrorResponse,
    HealthResponse,
    LogEntryListResponse,
    LogEntryResponse,
    ProviderHealthResponse,
    ReminderListResponse,
    ReminderResponse,
    UpdateLogEntryRequest,
    UpdateReminderRequest,
    UpdateVehicleRequest,
    VehicleListResponse,
    VehicleResponse,
)
from src.application.use_cases import CompleteReminderUseCase

__all__ = [
    # Request DTOs
    "CreateVehicleRequest",
    "UpdateVehicleRequest",
    "CreateLogEntryRequest",
    "UpdateLogEntryRequest",
    "CreateReminderRequest",
    "UpdateReminderRequest",
    "CompleteReminderRequest",
    # Response DTOs
    "VehicleResponse",
    "VehicleListResponse",
    "LogEntryResponse",
    "LogEntryListResponse",
    "ReminderResponse",
    "ReminderListResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
    # Use Cases
    "CompleteReminderUseCase",
]
