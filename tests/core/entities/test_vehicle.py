"""Tests for Vehicle entity."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.core.entities.vehicle import SpeedometerType, Vehicle


class TestVehicle:
    """Tests for Vehicle entity."""

    def test_create_minimal(self):
        vehicle = Vehicle(make="Toyota", model="Corolla", year=2020)
        assert vehicle.id is None
        assert vehicle.registration == ""
        assert vehicle.speedometer_type == SpeedometerType.NONE
        assert vehicle.created_at is not None

    def test_display_name(self):
        vehicle = Vehicle(make="Toyota", model="Corolla", year=2020)
        assert vehicle.display_name == "2020 Toyota Corolla"

    def test_speedometer_type_from_string(self):
        vehicle = Vehicle(make="Kubota", model="L2501", year=2018, speedometer_type="hours")
        assert vehicle.speedometer_type is SpeedometerType.HOURS

    def test_unknown_speedometer_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            Vehicle(make="Toyota", model="Corolla", year=2020, speedometer_type="miles")


class TestSpeedometerType:
    def test_values(self):
        assert [t.value for t in SpeedometerType] == ["none", "km", "hours"]
