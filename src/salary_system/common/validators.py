from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Optional, Type, TypeVar

from ..core.constants import AMOUNT_MAX, AMOUNT_PLACES
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def missing_fields(data: dict, required: Iterable[str]) -> list[str]:
    return [name for name in required if is_blank(data.get(name))]


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def parse_amount(value: Any) -> Decimal:
    """Parse a positive money amount (numbers or numeric strings)."""

    if isinstance(value, bool):
        raise ValidationError("Amount must be a positive number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a positive number")

    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be a positive number")
    if amount > AMOUNT_MAX:
        raise ValidationError(f"Amount must not exceed {AMOUNT_MAX}")

    try:
        amount = amount.quantize(Decimal(1).scaleb(-AMOUNT_PLACES))
    except InvalidOperation:
        raise ValidationError(f"Amount must not exceed {AMOUNT_MAX}")

    # Rounding can push a value to 0.00 or just past the column limit
    if amount <= 0:
        raise ValidationError("Amount must be a positive number")
    if amount > AMOUNT_MAX:
        raise ValidationError(f"Amount must not exceed {AMOUNT_MAX}")
    return amount
