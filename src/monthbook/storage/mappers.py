"""Mappers between stored JSON documents and domain entities.

Stored records use the camelCase layout written by the mobile app. Legacy
Portuguese type tags are accepted on read; canonical tags are written back.
"""

from datetime import date, datetime, UTC
from typing import Any, Optional

from dateutil.parser import isoparse

# Import entities directly to avoid circular import through domain/__init__.py
from monthbook.domain.entities import (
    Card,
    CreditInstallment,
    DebitExpense,
    Expense,
    ExpenseStatus,
    FixedExpense,
    Income,
    IncomeType,
    PaymentMethod,
    RecordStatus,
)

INCOME_TYPE_ALIASES = {
    "Fixed": IncomeType.FIXED,
    "Fixo": IncomeType.FIXED,
    "OneTime": IncomeType.ONE_TIME,
    "Ganho": IncomeType.ONE_TIME,
}

PAYMENT_METHOD_ALIASES = {
    "Debit": PaymentMethod.DEBIT,
    "Débito": PaymentMethod.DEBIT,
    "Fixed": PaymentMethod.FIXED,
    "Fixa": PaymentMethod.FIXED,
    "Credit": PaymentMethod.CREDIT,
    "Crédito": PaymentMethod.CREDIT,
}


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored ISO timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    parsed = isoparse(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_stored_date(value: Any) -> Optional[date]:
    """Parse a stored ISO date or timestamp into a calendar date.

    The mobile app stores local dates as UTC timestamps, so aware values are
    converted to local time before the date is taken. Plain dates are kept.
    """
    if value is None or value == "":
        return None
    parsed = isoparse(str(value))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _required_datetime(data: dict[str, Any], key: str) -> datetime:
    value = parse_datetime(data.get(key))
    if value is None:
        raise ValueError(f"Missing '{key}'")
    return value


def _required_date(data: dict[str, Any], key: str) -> date:
    value = parse_stored_date(data.get(key))
    if value is None:
        raise ValueError(f"Missing '{key}'")
    return value


def _excluded_months(data: dict[str, Any]) -> frozenset[str]:
    return frozenset(str(key) for key in data.get("excludedMonths") or [])


def _expense_status(data: dict[str, Any]) -> ExpenseStatus:
    return ExpenseStatus(data.get("status") or ExpenseStatus.PENDING.value)


def income_from_dict(data: dict[str, Any]) -> Income:
    """Convert a stored income document to an Income entity."""
    income_type = INCOME_TYPE_ALIASES.get(data["type"])
    if income_type is None:
        raise ValueError(f"Unknown income type {data['type']!r}")

    month = None
    year = None
    if income_type == IncomeType.ONE_TIME:
        # Stored month is zero-based
        month = int(data["month"]) + 1
        year = int(data["year"])
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month {data['month']!r}")

    return Income(
        id=str(data["id"]),
        name=str(data["name"]),
        value=float(data["value"]),
        income_type=income_type,
        created_at=_required_datetime(data, "createdAt"),
        status=RecordStatus(data.get("status") or RecordStatus.ACTIVE.value),
        deleted_at=parse_datetime(data.get("deletedAt")),
        excluded_months=_excluded_months(data),
        month=month,
        year=year,
    )


def income_to_dict(income: Income) -> dict[str, Any]:
    """Convert an Income entity to its stored document."""
    data: dict[str, Any] = {
        "id": income.id,
        "name": income.name,
        "value": income.value,
        "type": income.income_type.value,
        "createdAt": format_datetime(income.created_at),
        "status": income.status.value,
        "deletedAt": format_datetime(income.deleted_at),
    }
    if income.income_type == IncomeType.FIXED:
        data["excludedMonths"] = sorted(income.excluded_months)
    else:
        data["month"] = income.month - 1 if income.month is not None else None
        data["year"] = income.year
    return data


def expense_from_dict(data: dict[str, Any]) -> Expense:
    """Convert a stored expense document to the matching expense variant."""
    method = PAYMENT_METHOD_ALIASES.get(data.get("paymentMethod") or "Debit")
    if method is None:
        raise ValueError(f"Unknown payment method {data['paymentMethod']!r}")

    common = dict(
        id=str(data["id"]),
        description=str(data["description"]),
        value=float(data["value"]),
        created_at=_required_datetime(data, "createdAt"),
        status=_expense_status(data),
        paid_at=parse_datetime(data.get("paidAt")),
        deleted_at=parse_datetime(data.get("deletedAt")),
        modified_at=parse_datetime(data.get("modifiedAt")),
    )

    if method == PaymentMethod.FIXED:
        return FixedExpense(
            due_day_of_month=int(data["dueDayOfMonth"]),
            excluded_months=_excluded_months(data),
            **common,
        )

    if method == PaymentMethod.CREDIT:
        return CreditInstallment(
            original_expense_id=str(data["originalExpenseId"]),
            card_id=str(data["cardId"]),
            purchase_date=_required_date(data, "purchaseDate"),
            due_date=_required_date(data, "dueDate"),
            installment_number=int(data["installmentNumber"]),
            total_installments=int(data["totalInstallments"]),
            **common,
        )

    purchase_date = parse_stored_date(data.get("purchaseDate")) or parse_stored_date(data.get("dueDate"))
    if purchase_date is None:
        raise ValueError("Missing 'purchaseDate'")
    return DebitExpense(purchase_date=purchase_date, **common)


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    """Convert an expense variant to its stored document."""
    data: dict[str, Any] = {
        "id": expense.id,
        "description": expense.description,
        "value": expense.value,
        "paymentMethod": expense.payment_method.value,
        "createdAt": format_datetime(expense.created_at),
        "status": expense.status.value,
        "paidAt": format_datetime(expense.paid_at),
        "deletedAt": format_datetime(expense.deleted_at),
    }
    if expense.modified_at is not None:
        data["modifiedAt"] = format_datetime(expense.modified_at)

    if isinstance(expense, FixedExpense):
        data["dueDayOfMonth"] = expense.due_day_of_month
        data["excludedMonths"] = sorted(expense.excluded_months)
    elif isinstance(expense, CreditInstallment):
        data.update(
            {
                "originalExpenseId": expense.original_expense_id,
                "cardId": expense.card_id,
                "purchaseDate": format_date(expense.purchase_date),
                "dueDate": format_date(expense.due_date),
                "installmentNumber": expense.installment_number,
                "totalInstallments": expense.total_installments,
            }
        )
    else:
        data["purchaseDate"] = format_date(expense.purchase_date)
        data["dueDate"] = format_date(expense.due_date)
    return data


def card_from_dict(data: dict[str, Any]) -> Card:
    """Convert a stored card document to a Card entity."""
    return Card(
        id=str(data["id"]),
        alias=str(data["alias"]),
        due_day_of_month=int(data["dueDayOfMonth"]),
        created_at=_required_datetime(data, "createdAt"),
        status=RecordStatus(data.get("status") or RecordStatus.ACTIVE.value),
        deleted_at=parse_datetime(data.get("deletedAt")),
    )


def card_to_dict(card: Card) -> dict[str, Any]:
    """Convert a Card entity to its stored document."""
    return {
        "id": card.id,
        "alias": card.alias,
        "dueDayOfMonth": card.due_day_of_month,
        "status": card.status.value,
        "createdAt": format_datetime(card.created_at),
        "deletedAt": format_datetime(card.deleted_at),
    }
