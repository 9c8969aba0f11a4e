"""Projection of stored templates onto calendar months.

Fixed incomes and expenses repeat every month from their creation month;
one-time incomes, debit expenses and credit installments belong to exactly
one month. Nothing here performs I/O or mutates its inputs.
"""

from datetime import date
from typing import Iterable, Sequence

from monthbook.domain.entities import (
    CreditInstallment,
    DebitExpense,
    Expense,
    ExpenseOccurrence,
    FixedExpense,
    Income,
    IncomeOccurrence,
    IncomeType,
)
from monthbook.utils.months import (
    DateLike,
    last_day_of_month,
    month_index,
    month_key,
    month_sequence,
    month_start,
    same_month,
)


def occurrence_id(template_id: str, month: DateLike) -> str:
    """Build the per-month id of a fixed template occurrence."""
    return f"{template_id}-{month.year:04d}-{month.month:02d}"


def fixed_applies_to_month(created_at: DateLike, excluded_months: frozenset[str], month: DateLike) -> bool:
    """Check whether a fixed template recurs in ``month``.

    A fixed template never appears before its creation month nor in a month
    listed in its exclusions.
    """
    if month_key(month) in excluded_months:
        return False
    return month_index(created_at) <= month_index(month)


def _is_hidden(record, active_only: bool) -> bool:
    if record.deleted_at is not None:
        return True
    return active_only and record.is_inactive


def project_expense(expense: Expense, month: DateLike, active_only: bool = True) -> list[ExpenseOccurrence]:
    """Project a single expense template onto ``month``.

    Returns an empty list or a single occurrence.
    """
    if _is_hidden(expense, active_only):
        return []

    if isinstance(expense, FixedExpense):
        if not fixed_applies_to_month(expense.created_at, expense.excluded_months, month):
            return []
        day = min(expense.due_day_of_month, last_day_of_month(month.year, month.month))
        return [
            ExpenseOccurrence(
                id=occurrence_id(expense.id, month),
                template_id=expense.id,
                description=expense.description,
                value=expense.value,
                payment_method=expense.payment_method,
                due_date=date(month.year, month.month, day),
                status=expense.status,
                created_at=expense.created_at,
                paid_at=expense.paid_at,
            )
        ]

    if not same_month(expense.due_date, month):
        return []

    if isinstance(expense, CreditInstallment):
        return [
            ExpenseOccurrence(
                id=expense.id,
                template_id=expense.original_expense_id,
                description=expense.description,
                value=expense.value,
                payment_method=expense.payment_method,
                due_date=expense.due_date,
                status=expense.status,
                created_at=expense.created_at,
                paid_at=expense.paid_at,
                card_id=expense.card_id,
                installment_number=expense.installment_number,
                total_installments=expense.total_installments,
            )
        ]

    return [
        ExpenseOccurrence(
            id=expense.id,
            template_id=expense.id,
            description=expense.description,
            value=expense.value,
            payment_method=expense.payment_method,
            due_date=expense.due_date,
            status=expense.status,
            created_at=expense.created_at,
            paid_at=expense.paid_at,
        )
    ]


def project_expenses_for_month(
    month: DateLike, expenses: Iterable[Expense], active_only: bool = True
) -> list[ExpenseOccurrence]:
    """Expand expense templates into the occurrences of one month.

    Args:
        month: Any date inside the target month
        expenses: Stored expense templates and credit installments
        active_only: If True, also skip records whose status is inactive

    Returns:
        Occurrences sorted by due date, then creation time
    """
    occurrences: list[ExpenseOccurrence] = []
    for expense in expenses:
        occurrences.extend(project_expense(expense, month, active_only))
    occurrences.sort(key=lambda occ: (occ.due_date, occ.created_at))
    return occurrences


def project_income(income: Income, month: DateLike, active_only: bool = True) -> list[IncomeOccurrence]:
    """Project a single income template onto ``month``."""
    if _is_hidden(income, active_only):
        return []

    anchor = month_start(month)
    if income.income_type == IncomeType.FIXED:
        if not fixed_applies_to_month(income.created_at, income.excluded_months, month):
            return []
        projected_id = occurrence_id(income.id, month)
    else:
        if income.year != month.year or income.month != month.month:
            return []
        projected_id = income.id

    return [
        IncomeOccurrence(
            id=projected_id,
            template_id=income.id,
            name=income.name,
            value=income.value,
            income_type=income.income_type,
            month=anchor,
            status=income.status,
            created_at=income.created_at,
        )
    ]


def project_incomes_for_month(
    month: DateLike, incomes: Iterable[Income], active_only: bool = True
) -> list[IncomeOccurrence]:
    """Expand income templates into the occurrences of one month.

    Returns:
        Occurrences sorted by creation time
    """
    occurrences: list[IncomeOccurrence] = []
    for income in incomes:
        occurrences.extend(project_income(income, month, active_only))
    occurrences.sort(key=lambda occ: occ.created_at)
    return occurrences


def visible_months(
    today: DateLike,
    incomes: Sequence[Income],
    expenses: Sequence[Expense],
    months_before: int = 12,
    months_after: int = 12,
) -> list[date]:
    """List the months worth showing around ``today``.

    A month is kept when it has at least one active income or expense
    occurrence. The current month is always kept, even when empty.

    Returns:
        First-of-month dates in ascending order
    """
    current = month_start(today)
    months = []
    for month in month_sequence(current, months_before, months_after):
        if (
            month == current
            or project_incomes_for_month(month, incomes, active_only=True)
            or project_expenses_for_month(month, expenses, active_only=True)
        ):
            months.append(month)
    return sorted(months)
