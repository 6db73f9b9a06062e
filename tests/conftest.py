"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import date, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.core.entities import Reminder, SpeedometerType, Vehicle
from src.infrastructure.storage.sqlite import (
    SQLiteLogEntryStore,
    SQLiteReminderStore,
    SQLiteVehicleStore,
)
from src.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    mock.workflow.completion_timeout = 5.0
    return mock


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """Temporary database with every migration applied."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert results and all(r.success for r in results)
    return temp_db_path


@pytest.fixture
async def sqlite_pool(migrated_db: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Point the global connection pool at the migrated temp database."""
    import src.infrastructure.storage.sqlite.connection as conn_module

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield migrated_db
        finally:
            await conn_module.close_pool()


@pytest.fixture
def vehicle_store() -> SQLiteVehicleStore:
    return SQLiteVehicleStore()


@pytest.fixture
def log_entry_store() -> SQLiteLogEntryStore:
    return SQLiteLogEntryStore()


@pytest.fixture
def reminder_store() -> SQLiteReminderStore:
    return SQLiteReminderStore()


@pytest.fixture
def sample_vehicle() -> Vehicle:
    """Create a sample vehicle for testing."""
    return Vehicle(
        make="Toyota",
        model="Corolla",
        year=2020,
        registration="ABC123",
        speedometer_type=SpeedometerType.KM,
    )


@pytest.fixture
async def seeded_db(
    sqlite_pool: Path,
    vehicle_store: SQLiteVehicleStore,
    reminder_store: SQLiteReminderStore,
    sample_vehicle: Vehicle,
) -> dict:
    """
    One vehicle with two open reminders.

    Vehicle 1 is a 2020 Toyota Corolla; reminder 1 is an oil change due in
    30 days, reminder 2 a tire rotation due in 60 days.
    """
    vehicle = await vehicle_store.add(sample_vehicle)
    oil = await reminder_store.add(
        Reminder(
            vehicle_id=vehicle.id,
            description="Oil Change",
            type="Maintenance",
            due_date=date.today() + timedelta(days=30),
            due_speedometer_reading=20000,
        )
    )
    tires = await reminder_store.add(
        Reminder(
            vehicle_id=vehicle.id,
            description="Tire Rotation",
            type="Maintenance",
            due_date=date.today() + timedelta(days=60),
            due_speedometer_reading=25000,
        )
    )
    return {"vehicle": vehicle, "oil_change": oil, "tire_rotation": tires}
