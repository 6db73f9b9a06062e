"""Core domain entities."""

from src.core.entities.log_entry import LogEntry
from src.core.entities.reminder import Reminder
from src.core.entities.vehicle import SpeedometerType, Vehicle

__all__ = [
    # Vehicle entities
    "Vehicle",
    "SpeedometerType",
    # History entities
    "LogEntry",
    # Reminder entities
    "Reminder",
]
