"""
Domain exceptions for the maintenance log application.

Three families matter to callers: validation errors (bad input, nothing
was touched), not-found/conflict errors (detected before any write) and
storage errors (the database could not complete a read or write).
"""

from typing import Any


class MaintLogError(Exception):
    """Base exception for all maintenance log errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(MaintLogError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Not-found Exceptions
class NotFoundError(MaintLogError):
    """Requested entity does not exist."""

    pass


class VehicleNotFoundError(NotFoundError):
    """Vehicle not found in storage."""

    def __init__(self, vehicle_id: int):
        super().__init__(
            f"Vehicle not found: {vehicle_id}",
            code="VEHICLE_NOT_FOUND",
            details={"vehicle_id": vehicle_id},
        )


class LogEntryNotFoundError(NotFoundError):
    """Log entry not found in storage."""

    def __init__(self, log_entry_id: int):
        super().__init__(
            f"Log entry not found: {log_entry_id}",
            code="LOG_ENTRY_NOT_FOUND",
            details={"log_entry_id": log_entry_id},
        )


class ReminderNotFoundError(NotFoundError):
    """Reminder not found in storage."""

    def __init__(self, reminder_id: int):
        super().__init__(
            f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
            details={"reminder_id": reminder_id},
        )


# Conflict Exceptions
class ConflictError(MaintLogError):
    """Entity is in a state that does not allow the operation."""

    pass


class ReminderAlreadyCompletedError(ConflictError):
    """Reminder has already been completed."""

    def __init__(self, reminder_id: int):
        super().__init__(
            f"Reminder {reminder_id} is already completed",
            code="REMINDER_ALREADY_COMPLETED",
            details={"reminder_id": reminder_id},
        )


# Storage Exceptions
class StorageError(MaintLogError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ReminderCompletionError(StorageError):
    """A storage step of the reminder completion failed and was rolled back."""

    def __init__(self, reminder_id: int, step: str, error: str):
        super().__init__(
            f"Completing reminder {reminder_id} failed at step '{step}': {error}",
            code="REMINDER_COMPLETION_FAILED",
            details={
                "reminder_id": reminder_id,
                "step": step,
                "error": error,
                "rolled_back": True,
            },
        )


class OperationTimeoutError(MaintLogError):
    """Operation did not finish within its deadline."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(
            f"{operation} timed out after {timeout} seconds",
            code="OPERATION_TIMEOUT",
            details={"operation": operation, "timeout": timeout},
        )


class ConfigurationError(MaintLogError):
    """Configuration error."""

    pass
