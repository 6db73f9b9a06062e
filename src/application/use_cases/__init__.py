"""Application use cases."""

from src.application.use_cases.complete_reminder import CompleteReminderUseCase

__all__ = [
    "CompleteReminderUseCase",
]
