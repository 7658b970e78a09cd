from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError

CENTS = Decimal("0.01")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_amount(value: Any, field_name: str) -> Decimal:
    """Parse a non-negative money amount, rounded to 2 decimals."""
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number


def to_decimal(value: Any, field_name: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be numeric")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be numeric")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be numeric")
    return amount


def lenient_decimal(value: Any) -> Decimal:
    """Stored amounts: anything unparsable counts as 0."""
    if value is None or value == "" or isinstance(value, bool):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")
