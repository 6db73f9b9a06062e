"""Input guards shared by stores and use cases."""

from typing import Any

from src.core.exceptions import ValidationError


def require_positive_id(field: str, value: int | None) -> int:
    """Reject missing, zero or negative identifiers."""
    if value is None or value <= 0:
        raise ValidationError(field, "must be a positive integer", value)
    return value


def require_entity(field: str, entity: Any) -> Any:
    """Reject a missing entity argument."""
    if entity is None:
        raise ValidationError(field, "is required")
    return entity


def require_text(field: str, value: str | None) -> str:
    """Reject None, empty and whitespace-only strings."""
    if value is None or not value.strip():
        raise ValidationError(field, "cannot be null or empty", value)
    return value
