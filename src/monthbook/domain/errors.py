"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested record does not exist."""


class StorageError(DomainError):
    """The key-value backend failed to persist a write."""


def record_not_found(kind: str, record_id: str) -> str:
    """Return message for a missing record."""
    return f"{kind.capitalize()} '{record_id}' not found"


def card_not_found(card_id: str) -> str:
    """Return message for a missing or inactive card."""
    return f"Card '{card_id}' not found. Please select an active card."


def required_text(field: str) -> str:
    """Return message for an empty required text field."""
    return f"Please fill in the {field}."


def invalid_amount(field: str = "value") -> str:
    """Return message for a non-numeric or non-positive amount."""
    return f"Please enter a valid {field} greater than zero."


def invalid_installments() -> str:
    """Return message for an installment count below one."""
    return "Please enter a valid number of installments (minimum 1)."


def invalid_due_day(day: object) -> str:
    """Return message for a due day outside 1-31."""
    return f"Due day must be between 1 and 31, got {day}."


def storage_write_failed(key: str) -> str:
    """Return generic retryable message for a failed write."""
    return f"Could not save '{key}'. Please try again."
