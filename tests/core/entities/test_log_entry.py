"""Tests for LogEntry entity."""

from datetime import date

from src.core.entities import LogEntry, Vehicle


class TestLogEntry:
    """Tests for LogEntry entity."""

    def test_create_minimal(self):
        entry = LogEntry(vehicle_id=1, description="Oil changed")
        assert entry.id is None
        assert entry.date is None
        assert entry.cost == 0.0
        assert entry.type == ""
        assert entry.notes is None
        assert entry.speedometer_reading is None
        assert entry.reminder_id is None
        assert entry.vehicle is None

    def test_create_full(self):
        vehicle = Vehicle(id=1, make="Toyota", model="Corolla", year=2020)
        entry = LogEntry(
            id=5,
            vehicle_id=1,
            date=date(2024, 5, 1),
            description="Brake pads replaced",
            cost=180.5,
            type="Repair",
            notes="Front axle",
            speedometer_reading=45210,
            reminder_id=3,
            vehicle=vehicle,
        )
        assert entry.date == date(2024, 5, 1)
        assert entry.cost == 180.5
        assert entry.reminder_id == 3
        assert entry.vehicle.display_name == "2020 Toyota Corolla"

    def test_date_parsed_from_iso_string(self):
        entry = LogEntry(vehicle_id=1, description="x", date="2024-02-29")
        assert entry.date == date(2024, 2, 29)
