"""Unit tests for domain exceptions."""

import pytest

from src.core.exceptions import (
    ConfigurationError,
    ConflictError,
    DatabaseError,
    LogEntryNotFoundError,
    MaintLogError,
    NotFoundError,
    OperationTimeoutError,
    ReminderAlreadyCompletedError,
    ReminderCompletionError,
    ReminderNotFoundError,
    StorageError,
    ValidationError,
    VehicleNotFoundError,
)


class TestMaintLogError:
    """Tests for base MaintLogError exception."""

    def test_basic_initialization(self):
        error = MaintLogError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.code == "MaintLogError"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_to_dict(self):
        error = MaintLogError("Boom", code="BOOM", details={"a": 1})
        assert error.to_dict() == {
            "error": "BOOM",
            "message": "Boom",
            "details": {"a": 1},
        }


class TestValidationError:
    def test_details(self):
        error = ValidationError("reminder_id", "must be a positive integer", 0)
        assert error.code == "VALIDATION_ERROR"
        assert error.details == {
            "field": "reminder_id",
            "message": "must be a positive integer",
            "value": "0",
        }
        assert "reminder_id" in error.message

    def test_long_value_truncated(self):
        error = ValidationError("log_description", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_none_value(self):
        error = ValidationError("log_date", "is required")
        assert error.details["value"] is None


@pytest.mark.parametrize(
    ("error", "code", "key"),
    [
        (VehicleNotFoundError(7), "VEHICLE_NOT_FOUND", "vehicle_id"),
        (LogEntryNotFoundError(7), "LOG_ENTRY_NOT_FOUND", "log_entry_id"),
        (ReminderNotFoundError(7), "REMINDER_NOT_FOUND", "reminder_id"),
    ],
)
def test_not_found_errors(error, code, key):
    assert isinstance(error, NotFoundError)
    assert error.code == code
    assert error.details == {key: 7}


class TestConflictErrors:
    def test_already_completed(self):
        error = ReminderAlreadyCompletedError(3)
        assert isinstance(error, ConflictError)
        assert error.code == "REMINDER_ALREADY_COMPLETED"
        assert error.details["reminder_id"] == 3


class TestStorageErrors:
    def test_database_error(self):
        error = DatabaseError("reminder_add", "disk I/O error")
        assert isinstance(error, StorageError)
        assert error.code == "DATABASE_ERROR"
        assert error.details == {"operation": "reminder_add", "error": "disk I/O error"}

    def test_completion_error_reports_step_and_rollback(self):
        error = ReminderCompletionError(1, "add_log_entry", "disk full")
        assert isinstance(error, StorageError)
        assert error.code == "REMINDER_COMPLETION_FAILED"
        assert error.details["step"] == "add_log_entry"
        assert error.details["rolled_back"] is True
        assert "add_log_entry" in error.message


class TestOtherErrors:
    def test_timeout(self):
        error = OperationTimeoutError("complete_reminder", 2.5)
        assert error.code == "OPERATION_TIMEOUT"
        assert error.details == {"operation": "complete_reminder", "timeout": 2.5}
        assert not isinstance(error, StorageError)

    def test_configuration(self):
        assert isinstance(ConfigurationError("bad"), MaintLogError)
