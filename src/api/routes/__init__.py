"""API route modules."""

from src.api.routes.health import router as health_router
from src.api.routes.log_entries import router as log_entries_router
from src.api.routes.reminders import router as reminders_router
from src.api.routes.vehicles import router as vehicles_router

__all__ = [
    "health_router",
    "vehicles_router",
    "log_entries_router",
    "reminders_router",
]
