from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def require_date_order(start: date, end: Optional[date], *, field_name: str = "end_date") -> None:
    if end is not None and end < start:
        raise ValidationError(f"{field_name} cannot be before start_date")


def require_object(value: Any, what: str = "Request body") -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{what} must be a JSON object")
    return value
