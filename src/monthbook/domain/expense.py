"""Expense domain service."""

import logging
from dataclasses import replace
from datetime import date, datetime, UTC
from typing import Optional

from monthbook.domain.card import CardService
from monthbook.domain.entities import (
    Card,
    CreditInstallment,
    DebitExpense,
    Expense,
    ExpenseOccurrence,
    ExpenseStatus,
    FixedExpense,
)
from monthbook.domain.errors import (
    NotFoundError,
    ValidationError,
    card_not_found,
    record_not_found,
)
from monthbook.domain.projection import project_expenses_for_month
from monthbook.domain.validation import (
    require_due_day,
    require_installments,
    require_positive_amount,
    require_text,
)
from monthbook.storage.records import Collection, RecordStore
from monthbook.utils.due_dates import installment_due_dates
from monthbook.utils.ids import new_id

logger = logging.getLogger(__name__)


def build_installments(
    original_expense_id: str,
    description: str,
    total_value: float,
    purchase_date: date,
    card: Card,
    installments: int,
    created_at: datetime,
    modified_at: Optional[datetime] = None,
) -> list[CreditInstallment]:
    """Materialize the installments of a credit purchase.

    The total is split evenly; due dates follow the card's billing day.
    """
    installment_value = total_value / installments
    due_dates = installment_due_dates(purchase_date, card.due_day_of_month, installments)
    return [
        CreditInstallment(
            id=f"{original_expense_id}-{number}",
            description=description,
            value=installment_value,
            original_expense_id=original_expense_id,
            card_id=card.id,
            purchase_date=purchase_date,
            due_date=due_date,
            installment_number=number,
            total_installments=installments,
            created_at=created_at,
            modified_at=modified_at,
        )
        for number, due_date in enumerate(due_dates, start=1)
    ]


class ExpenseService:
    """Service for managing expenses of every payment method."""

    def __init__(self, store: RecordStore):
        """Initialize expense service.

        Args:
            store: Record store instance
        """
        self.store = store
        self.card_service = CardService(store)

    def _save(self, expenses: list[Expense]) -> None:
        self.store.save_all(Collection.EXPENSES, expenses)
        self.store.touch_last_update()

    def _resolve_card(self, card_id: Optional[str]) -> Card:
        if not card_id:
            raise ValidationError("Please select a card for credit expenses.")
        try:
            return self.card_service.get_active_card(card_id)
        except NotFoundError:
            raise NotFoundError(card_not_found(card_id))

    def _find_index(self, expenses: list[Expense], expense_id: str) -> int:
        for index, expense in enumerate(expenses):
            if expense.id == expense_id:
                return index
        return -1

    # Creation

    def create_debit_expense(self, description: str, value: float, purchase_date: date) -> DebitExpense:
        """Create a single-occurrence debit expense.

        Raises:
            ValidationError: If description or value is invalid
        """
        expense = DebitExpense(
            id=new_id(),
            description=require_text(description, "expense description"),
            value=require_positive_amount(value),
            purchase_date=purchase_date,
            created_at=datetime.now(UTC),
        )
        self.store.append(Collection.EXPENSES, expense)
        self.store.touch_last_update()
        logger.info("Created debit expense %s", expense.id)
        return expense

    def create_fixed_expense(self, description: str, value: float, due_day_of_month: int) -> FixedExpense:
        """Create a recurring fixed expense.

        Raises:
            ValidationError: If description, value or due day is invalid
        """
        expense = FixedExpense(
            id=new_id(),
            description=require_text(description, "expense description"),
            value=require_positive_amount(value),
            due_day_of_month=require_due_day(due_day_of_month),
            created_at=datetime.now(UTC),
        )
        self.store.append(Collection.EXPENSES, expense)
        self.store.touch_last_update()
        logger.info("Created fixed expense %s", expense.id)
        return expense

    def create_credit_expense(
        self,
        description: str,
        total_value: float,
        purchase_date: date,
        card_id: str,
        installments: int = 1,
    ) -> list[CreditInstallment]:
        """Create a credit purchase split into installments.

        Args:
            description: Purchase description
            total_value: Total purchase amount, split evenly between installments
            purchase_date: Date of the purchase
            card_id: ID of an active card
            installments: Number of installments (minimum 1)

        Returns:
            The stored installments, in order

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If the card doesn't exist or was deleted
        """
        description = require_text(description, "expense description")
        total_value = require_positive_amount(total_value)
        installments = require_installments(installments)
        card = self._resolve_card(card_id)

        created = build_installments(
            original_expense_id=new_id(),
            description=description,
            total_value=total_value,
            purchase_date=purchase_date,
            card=card,
            installments=installments,
            created_at=datetime.now(UTC),
        )
        expenses = self.store.load_expenses()
        expenses.extend(created)
        self._save(expenses)
        logger.info(
            "Created credit purchase %s with %d installments", created[0].original_expense_id, installments
        )
        return created

    # Queries

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        """Get an expense or installment by ID."""
        expenses = self.store.load_expenses()
        index = self._find_index(expenses, expense_id)
        return expenses[index] if index != -1 else None

    def list_expenses(self, include_inactive: bool = False) -> list[Expense]:
        """List stored expenses and installments.

        Args:
            include_inactive: If True, include soft-deleted records
        """
        expenses = self.store.load_expenses()
        if include_inactive:
            return expenses
        return [expense for expense in expenses if not expense.is_inactive and expense.deleted_at is None]

    def credit_purchase(self, original_expense_id: str) -> list[CreditInstallment]:
        """Return the installments of one credit purchase, in order."""
        installments = [
            expense
            for expense in self.store.load_expenses()
            if isinstance(expense, CreditInstallment) and expense.original_expense_id == original_expense_id
        ]
        return sorted(installments, key=lambda installment: installment.installment_number)

    def expenses_for_month(self, month: date, active_only: bool = True) -> list[ExpenseOccurrence]:
        """Project stored expenses onto one month."""
        return project_expenses_for_month(month, self.store.load_expenses(), active_only=active_only)

    # Updates

    def _replace_single(self, expense_id: str, build) -> Expense:
        expenses = self.store.load_expenses()
        index = self._find_index(expenses, expense_id)
        if index != -1 and isinstance(expenses[index], CreditInstallment):
            raise ValidationError(
                f"Expense '{expense_id}' is a credit installment; edit the whole purchase instead."
            )

        now = datetime.now(UTC)
        if index == -1:
            logger.warning("Expense %s not found for update, saving edit as a new expense", expense_id)
            updated = build(id=new_id(), created_at=now)
            expenses.append(updated)
        else:
            existing = expenses[index]
            updated = build(
                id=existing.id,
                created_at=existing.created_at,
                status=existing.status,
                paid_at=existing.paid_at,
                deleted_at=existing.deleted_at,
                modified_at=now,
            )
            expenses[index] = updated
        self._save(expenses)
        return updated

    def update_debit_expense(
        self, expense_id: str, description: str, value: float, purchase_date: date
    ) -> DebitExpense:
        """Update a debit expense in place.

        A fixed expense edited this way becomes a debit expense with the same ID.
        If the expense no longer exists, the edit is stored as a new expense.

        Raises:
            ValidationError: If any field is invalid or the ID is a credit installment
        """
        description = require_text(description, "expense description")
        value = require_positive_amount(value)

        def build(**stamps):
            return DebitExpense(description=description, value=value, purchase_date=purchase_date, **stamps)

        return self._replace_single(expense_id, build)

    def update_fixed_expense(
        self, expense_id: str, description: str, value: float, due_day_of_month: int
    ) -> FixedExpense:
        """Update a fixed expense in place, keeping its excluded months.

        If the expense no longer exists, the edit is stored as a new expense.

        Raises:
            ValidationError: If any field is invalid or the ID is a credit installment
        """
        description = require_text(description, "expense description")
        value = require_positive_amount(value)
        due_day_of_month = require_due_day(due_day_of_month)
        existing = self.get_expense(expense_id)
        excluded = existing.excluded_months if isinstance(existing, FixedExpense) else frozenset()

        def build(**stamps):
            return FixedExpense(
                description=description,
                value=value,
                due_day_of_month=due_day_of_month,
                excluded_months=excluded,
                **stamps,
            )

        return self._replace_single(expense_id, build)

    def update_credit_expense(
        self,
        original_expense_id: str,
        description: str,
        total_value: float,
        purchase_date: date,
        card_id: str,
        installments: int,
    ) -> list[CreditInstallment]:
        """Regenerate every installment of a credit purchase.

        All installments sharing ``original_expense_id`` are removed and the
        schedule is rebuilt from the edited fields. Payment state of the old
        installments is not carried over. If the purchase no longer exists,
        the edit is stored as a new purchase.

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If the card doesn't exist or was deleted
        """
        description = require_text(description, "expense description")
        total_value = require_positive_amount(total_value)
        installments = require_installments(installments)
        card = self._resolve_card(card_id)

        expenses = self.store.load_expenses()
        previous = [
            expense
            for expense in expenses
            if isinstance(expense, CreditInstallment) and expense.original_expense_id == original_expense_id
        ]
        now = datetime.now(UTC)
        if previous:
            created_at = min(installment.created_at for installment in previous)
            purchase_id = original_expense_id
            modified_at = now
        else:
            logger.warning(
                "Credit purchase %s not found for update, saving edit as a new purchase", original_expense_id
            )
            created_at = now
            purchase_id = new_id()
            modified_at = None

        remaining = [
            expense
            for expense in expenses
            if not (isinstance(expense, CreditInstallment) and expense.original_expense_id == original_expense_id)
        ]
        regenerated = build_installments(
            original_expense_id=purchase_id,
            description=description,
            total_value=total_value,
            purchase_date=purchase_date,
            card=card,
            installments=installments,
            created_at=created_at,
            modified_at=modified_at,
        )
        remaining.extend(regenerated)
        self._save(remaining)
        logger.info("Regenerated credit purchase %s with %d installments", purchase_id, installments)
        return regenerated

    # Soft delete and payment state

    def delete_expense(self, expense_id: str) -> list[Expense]:
        """Soft-delete an expense.

        Deleting any installment of a credit purchase, or passing the purchase's
        ``original_expense_id``, deactivates the whole purchase.

        Returns:
            The deactivated records

        Raises:
            NotFoundError: If no expense matches the ID
        """
        expenses = self.store.load_expenses()
        index = self._find_index(expenses, expense_id)
        if index != -1:
            target = expenses[index]
            purchase_id = target.original_expense_id if isinstance(target, CreditInstallment) else None
        else:
            purchase_id = expense_id

        now = datetime.now(UTC)
        deleted: list[Expense] = []
        for position, expense in enumerate(expenses):
            if expense.id == expense_id or (
                purchase_id is not None
                and isinstance(expense, CreditInstallment)
                and expense.original_expense_id == purchase_id
            ):
                expenses[position] = replace(expense, status=ExpenseStatus.INACTIVE, deleted_at=now)
                deleted.append(expenses[position])

        if not deleted:
            raise NotFoundError(record_not_found("expense", expense_id))

        self._save(expenses)
        logger.info("Soft-deleted %d expense record(s) for %s", len(deleted), expense_id)
        return deleted

    def _set_paid(self, expense_id: str, paid: Optional[bool]) -> Expense:
        expenses = self.store.load_expenses()
        index = self._find_index(expenses, expense_id)
        if index == -1:
            raise NotFoundError(record_not_found("expense", expense_id))

        expense = expenses[index]
        if isinstance(expense, FixedExpense):
            raise ValidationError("Fixed expenses recur every month and cannot be marked as paid.")
        if expense.is_inactive or expense.deleted_at is not None:
            raise ValidationError(f"Expense '{expense_id}' was deleted and cannot change payment state.")

        if paid is None:
            paid = expense.status != ExpenseStatus.PAID
        if paid:
            updated = replace(expense, status=ExpenseStatus.PAID, paid_at=datetime.now(UTC))
        else:
            updated = replace(expense, status=ExpenseStatus.PENDING, paid_at=None)

        expenses[index] = updated
        self._save(expenses)
        return updated

    def mark_paid(self, expense_id: str) -> Expense:
        """Mark a debit expense or credit installment as paid.

        Raises:
            NotFoundError: If the expense doesn't exist
            ValidationError: If the expense is fixed or deleted
        """
        return self._set_paid(expense_id, True)

    def mark_pending(self, expense_id: str) -> Expense:
        """Mark a debit expense or credit installment as pending again."""
        return self._set_paid(expense_id, False)

    def toggle_paid(self, expense_id: str) -> Expense:
        """Flip a debit expense or credit installment between pending and paid."""
        return self._set_paid(expense_id, None)
