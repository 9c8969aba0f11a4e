"""Input validation shared by the mutation services.

Every check raises ValidationError before any storage write happens.
"""

import math
from typing import Any

from monthbook.domain.errors import (
    ValidationError,
    invalid_amount,
    invalid_due_day,
    invalid_installments,
    required_text,
)


def require_text(value: Any, field: str) -> str:
    """Return the stripped text or reject an empty value."""
    if value is None or not str(value).strip():
        raise ValidationError(required_text(field))
    return str(value).strip()


def require_positive_amount(value: Any, field: str = "value") -> float:
    """Return the amount as float or reject non-numeric and non-positive input."""
    if isinstance(value, bool):
        raise ValidationError(invalid_amount(field))
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(invalid_amount(field))
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(invalid_amount(field))
    return amount


def require_due_day(value: Any) -> int:
    """Return the due day or reject values outside 1-31."""
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 31:
        raise ValidationError(invalid_due_day(value))
    return value


def require_installments(value: Any) -> int:
    """Return the installment count or reject counts below one."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(invalid_installments())
    return value
