"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.storage import (
    ILogEntryStore,
    IReminderStore,
    IUnitOfWork,
    IVehicleStore,
)

__all__ = [
    # Storage interfaces
    "IVehicleStore",
    "ILogEntryStore",
    "IReminderStore",
    "IUnitOfWork",
]
