from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be {min_len}+ characters")
    return value


def require_present_count(value: Any) -> Optional[int]:
    """A present count is either blank (None) or a non-negative integer."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Present count must be a whole number, got {value!r}")
    if value < 0:
        raise ValidationError("Present count cannot be negative")
    return value


def require_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")
    if isinstance(value, bool) or number < low or number > high:
        raise ValidationError(f"Invalid {field_name}")
    return number
