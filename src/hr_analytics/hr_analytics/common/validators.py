from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date_range(start: date, end: date, *, max_span_days: Optional[int] = None) -> None:
    if start is None or end is None:
        raise ValidationError("start_date and end_date are required")
    if end < start:
        raise ValidationError("end_date must be on or after start_date")
    if max_span_days is not None and (end - start).days + 1 > max_span_days:
        raise ValidationError(f"Date range cannot exceed {max_span_days} days")
