"""Month-scoped maintenance: clearing a month and wiping collections."""

import logging
from dataclasses import replace
from datetime import date, datetime, time, UTC

from monthbook.domain.entities import (
    ClearMonthResult,
    ExpenseStatus,
    FixedExpense,
    IncomeType,
    RecordStatus,
)
from monthbook.storage.records import Collection, RecordStore
from monthbook.utils.months import month_end, month_index, month_key, month_start, same_month

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for operations that span every collection of a month."""

    def __init__(self, store: RecordStore):
        """Initialize ledger service.

        Args:
            store: Record store instance
        """
        self.store = store

    def clear_month(self, month: date) -> ClearMonthResult:
        """Soft-delete everything shown in one month.

        Fixed incomes and expenses get the month added to their excluded
        months and stay active for every other month. One-time incomes, debit
        expenses and credit installments falling in the month become inactive,
        stamped with the month's last day as deletion time. Records outside
        the month are left untouched.

        Args:
            month: Any date inside the month to clear

        Returns:
            Counts of excluded fixed templates and deactivated records
        """
        target = month_start(month)
        key = month_key(target)
        deleted_at = datetime.combine(month_end(target), time.min, tzinfo=UTC)
        excluded = 0
        deactivated = 0

        incomes = self.store.load_incomes()
        for index, income in enumerate(incomes):
            if income.income_type == IncomeType.FIXED:
                if key not in income.excluded_months and month_index(income.created_at) <= month_index(target):
                    incomes[index] = replace(income, excluded_months=income.excluded_months | {key})
                    excluded += 1
            elif income.year == target.year and income.month == target.month and not income.is_inactive:
                incomes[index] = replace(income, status=RecordStatus.INACTIVE, deleted_at=deleted_at)
                deactivated += 1

        expenses = self.store.load_expenses()
        for index, expense in enumerate(expenses):
            if isinstance(expense, FixedExpense):
                if key not in expense.excluded_months and month_index(expense.created_at) <= month_index(target):
                    expenses[index] = replace(expense, excluded_months=expense.excluded_months | {key})
                    excluded += 1
            elif same_month(expense.due_date, target) and not expense.is_inactive:
                expenses[index] = replace(expense, status=ExpenseStatus.INACTIVE, deleted_at=deleted_at)
                deactivated += 1

        self.store.save_all(Collection.INCOMES, incomes)
        self.store.save_all(Collection.EXPENSES, expenses)
        self.store.touch_last_update()
        logger.info("Cleared %s: %d fixed excluded, %d deactivated", key, excluded, deactivated)
        return ClearMonthResult(month=target, excluded_fixed=excluded, deactivated=deactivated)

    def wipe_collection(self, collection: Collection) -> None:
        """Permanently delete every record of a collection. Irreversible."""
        self.store.wipe(collection)
        self.store.touch_last_update()
        logger.warning("Permanently wiped %s", collection.value)

    def wipe_incomes(self) -> None:
        """Permanently delete every income."""
        self.wipe_collection(Collection.INCOMES)

    def wipe_expenses(self) -> None:
        """Permanently delete every expense and installment."""
        self.wipe_collection(Collection.EXPENSES)

    def wipe_cards(self) -> None:
        """Permanently delete every card."""
        self.wipe_collection(Collection.CARDS)

    def wipe_all(self) -> None:
        """Permanently delete incomes, expenses and cards."""
        for collection in Collection:
            self.wipe_collection(collection)
