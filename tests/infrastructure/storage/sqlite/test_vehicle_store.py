"""Tests for SQLiteVehicleStore."""

import sqlite3
from datetime import date, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

import src.infrastructure.storage.sqlite.vehicle_store as vehicle_store_module
from src.core.entities import LogEntry, Reminder, SpeedometerType, Vehicle
from src.core.exceptions import DatabaseError, ValidationError


class TestSQLiteVehicleStore:
    """Tests for SQLiteVehicleStore."""

    async def test_add_assigns_id(self, sqlite_pool: Path, vehicle_store, sample_vehicle):
        created = await vehicle_store.add(sample_vehicle)
        assert created.id is not None and created.id > 0
        assert created is sample_vehicle

    async def test_round_trip(self, sqlite_pool: Path, vehicle_store, sample_vehicle):
        created = await vehicle_store.add(sample_vehicle)

        fetched = await vehicle_store.get(created.id)

        assert fetched is not None
        assert fetched.make == "Toyota"
        assert fetched.model == "Corolla"
        assert fetched.year == 2020
        assert fetched.registration == "ABC123"
        assert fetched.speedometer_type is SpeedometerType.KM
        assert fetched.created_at == created.created_at

    async def test_get_missing_returns_none(self, sqlite_pool: Path, vehicle_store):
        assert await vehicle_store.get(999) is None

    async def test_list_all_sorted(self, sqlite_pool: Path, vehicle_store):
        await vehicle_store.add(Vehicle(make="Volvo", model="V70", year=2008))
        await vehicle_store.add(Vehicle(make="Audi", model="A4", year=2015))

        vehicles = await vehicle_store.list_all()

        assert [v.make for v in vehicles] == ["Audi", "Volvo"]

    async def test_update(self, sqlite_pool: Path, vehicle_store, sample_vehicle):
        created = await vehicle_store.add(sample_vehicle)
        created.registration = "XYZ789"
        created.speedometer_type = SpeedometerType.HOURS

        await vehicle_store.update(created)
        fetched = await vehicle_store.get(created.id)

        assert fetched.registration == "XYZ789"
        assert fetched.speedometer_type is SpeedometerType.HOURS

    async def test_delete(self, sqlite_pool: Path, vehicle_store, sample_vehicle):
        created = await vehicle_store.add(sample_vehicle)

        assert await vehicle_store.delete(created.id) is True
        assert await vehicle_store.get(created.id) is None

    async def test_delete_missing_is_noop(self, sqlite_pool: Path, vehicle_store):
        assert await vehicle_store.delete(999) is False

    async def test_delete_cascades(
        self, seeded_db: dict, vehicle_store, reminder_store, log_entry_store
    ):
        vehicle = seeded_db["vehicle"]
        await log_entry_store.add(
            LogEntry(vehicle_id=vehicle.id, description="Washed", date=date.today())
        )

        await vehicle_store.delete(vehicle.id)

        assert await reminder_store.list_all() == []
        assert await log_entry_store.list_all() == []


class TestVehicleStoreValidation:
    """Argument guards run before any database access."""

    @pytest.mark.parametrize("vehicle_id", [0, -5])
    async def test_get_rejects_bad_id(self, vehicle_store, vehicle_id):
        with pytest.raises(ValidationError):
            await vehicle_store.get(vehicle_id)

    async def test_delete_rejects_bad_id(self, vehicle_store):
        with pytest.raises(ValidationError):
            await vehicle_store.delete(0)

    async def test_add_rejects_none(self, vehicle_store):
        with pytest.raises(ValidationError):
            await vehicle_store.add(None)

    async def test_update_rejects_unsaved(self, vehicle_store, sample_vehicle):
        with pytest.raises(ValidationError):
            await vehicle_store.update(sample_vehicle)


class TestVehicleStoreErrors:
    async def test_driver_errors_become_database_error(self, sqlite_pool: Path, vehicle_store):
        def broken():
            raise sqlite3.OperationalError("database is locked")

        with patch.object(vehicle_store_module, "get_connection", side_effect=broken):
            with pytest.raises(DatabaseError) as exc_info:
                await vehicle_store.list_all()

        assert exc_info.value.details["operation"] == "vehicle_list"

    async def test_reminder_for_unknown_vehicle_rejected(self, sqlite_pool: Path, reminder_store):
        with pytest.raises(DatabaseError):
            await reminder_store.add(
                Reminder(
                    vehicle_id=42,
                    description="Orphan",
                    due_date=date.today() + timedelta(days=1),
                )
            )
