from __future__ import annotations

from datetime import time
from typing import Any

from ..core.exceptions import ConfigurationError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be a whole number of minutes/seconds, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative, got {value}")
    return value


def require_time(value: Any, field_name: str) -> time:
    if not isinstance(value, time):
        raise ConfigurationError(f"{field_name} must be a time of day (HH:MM), got {value!r}")
    return value


def require_window(start: time, end: time, name: str) -> None:
    if not start < end:
        raise ConfigurationError(
            f"{name} window start {start:%H:%M} must be before end {end:%H:%M}"
        )
