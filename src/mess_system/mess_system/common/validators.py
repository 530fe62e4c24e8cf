from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required.")
    return value.strip()


def require_positive_price(value, field_name: str = "Price") -> Decimal:
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError):
        raise ValidationError(f"{field_name} is not a valid number.")
    if not price.is_finite() or price <= 0:
        raise ValidationError(f"{field_name} must be greater than 0.")
    return price


def require_positive_id(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not valid.")
    if number <= 0:
        raise ValidationError(f"{field_name} is not valid.")
    return number
