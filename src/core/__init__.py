"""Core domain layer - entities, interfaces, exceptions and validators."""

from src.core import entities, exceptions, interfaces, validation

__all__ = ["entities", "interfaces", "exceptions", "validation"]
