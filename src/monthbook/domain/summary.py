"""Monthly totals domain service."""

from datetime import date
from typing import Iterable, Optional, Sequence

from monthbook.domain.entities import (
    Expense,
    Income,
    IncomeType,
    MonthLedger,
    MonthSummary,
)
from monthbook.domain.projection import (
    fixed_applies_to_month,
    project_expenses_for_month,
    project_incomes_for_month,
    visible_months,
)
from monthbook.storage.records import RecordStore
from monthbook.utils.months import DateLike, month_index, month_start


def income_counts_in_month(income: Income, month: DateLike) -> bool:
    """Check whether an income contributes to the total of ``month``.

    Fixed incomes deleted in month M stop counting from M onward, while
    earlier months keep them. One-time incomes count only while active.
    """
    if income.income_type == IncomeType.FIXED:
        if income.deleted_at is not None:
            if month_index(income.deleted_at) <= month_index(month):
                return False
        elif income.is_inactive:
            return False
        return fixed_applies_to_month(income.created_at, income.excluded_months, month)

    if income.deleted_at is not None or income.is_inactive:
        return False
    return income.year == month.year and income.month == month.month


def total_income_for_month(month: DateLike, incomes: Iterable[Income]) -> float:
    """Sum the incomes counted in ``month``."""
    total = 0.0
    for income in incomes:
        if income_counts_in_month(income, month):
            total += income.value
    return total


def total_expense_for_month(month: DateLike, expenses: Iterable[Expense]) -> float:
    """Sum the active expense occurrences of ``month``."""
    total = 0.0
    for occurrence in project_expenses_for_month(month, expenses, active_only=True):
        total += occurrence.value
    return total


def summarize_month(month: DateLike, incomes: Sequence[Income], expenses: Sequence[Expense]) -> MonthSummary:
    """Build the income/expense/net summary of one month."""
    return MonthSummary(
        month=month_start(month),
        income_total=total_income_for_month(month, incomes),
        expense_total=total_expense_for_month(month, expenses),
    )


def build_month_ledger(month: DateLike, incomes: Sequence[Income], expenses: Sequence[Expense]) -> MonthLedger:
    """Build the ledger of one month from already loaded templates."""
    return MonthLedger(
        summary=summarize_month(month, incomes, expenses),
        incomes=tuple(project_incomes_for_month(month, incomes, active_only=True)),
        expenses=tuple(project_expenses_for_month(month, expenses, active_only=True)),
    )


class SummaryService:
    """Service for building monthly ledgers from stored records."""

    def __init__(self, store: RecordStore):
        """Initialize summary service.

        Args:
            store: Record store instance
        """
        self.store = store

    def month_ledger(self, month: DateLike) -> MonthLedger:
        """Load all templates and build the ledger for one month."""
        return build_month_ledger(month, self.store.load_incomes(), self.store.load_expenses())

    def month_summary(self, month: DateLike) -> MonthSummary:
        """Load all templates and total one month."""
        return summarize_month(month, self.store.load_incomes(), self.store.load_expenses())

    def visible_months(
        self, today: Optional[date] = None, months_before: int = 12, months_after: int = 12
    ) -> list[date]:
        """List the months with activity around today, always including today."""
        return visible_months(
            today or date.today(),
            self.store.load_incomes(),
            self.store.load_expenses(),
            months_before=months_before,
            months_after=months_after,
        )

    def month_ledgers(
        self, today: Optional[date] = None, months_before: int = 12, months_after: int = 12
    ) -> list[MonthLedger]:
        """Build the ledger of every visible month, loading each collection once."""
        incomes = self.store.load_incomes()
        expenses = self.store.load_expenses()
        months = visible_months(
            today or date.today(), incomes, expenses, months_before=months_before, months_after=months_after
        )
        return [build_month_ledger(month, incomes, expenses) for month in months]
