from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def coerce_date(value: Any, field_name: str) -> date:
    """Accept a date, or an ISO string optionally carrying a time part."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")

    text = value.strip()
    try:
        return parse_iso_date(text)
    except ValueError:
        pass

    # Full ISO datetime; older interpreters do not read a trailing "Z"
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return coerce_date(value, field_name)


def format_date(value: Optional[date]) -> Optional[str]:
    return value.strftime(DATE_FORMAT) if value else None


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
