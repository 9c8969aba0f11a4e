"""Income domain service."""

import logging
from dataclasses import replace
from datetime import date, datetime, UTC
from typing import Optional

from monthbook.domain.entities import Income, IncomeOccurrence, IncomeType, RecordStatus
from monthbook.domain.errors import NotFoundError, ValidationError, record_not_found
from monthbook.domain.projection import project_incomes_for_month
from monthbook.domain.validation import require_positive_amount, require_text
from monthbook.storage.records import Collection, RecordStore
from monthbook.utils.ids import new_id

logger = logging.getLogger(__name__)


class IncomeService:
    """Service for managing income templates."""

    def __init__(self, store: RecordStore):
        """Initialize income service.

        Args:
            store: Record store instance
        """
        self.store = store

    def _validated_fields(
        self, name: str, value: float, income_type: IncomeType, month: Optional[date]
    ) -> tuple[str, float, IncomeType, Optional[int], Optional[int]]:
        name = require_text(name, "income name")
        value = require_positive_amount(value)
        try:
            income_type = IncomeType(income_type)
        except ValueError:
            raise ValidationError(f"Unknown income type '{income_type}'")
        if income_type == IncomeType.ONE_TIME:
            if month is None:
                raise ValidationError("One-time incomes need a month.")
            return name, value, income_type, month.month, month.year
        return name, value, income_type, None, None

    def _save(self, incomes: list[Income]) -> None:
        self.store.save_all(Collection.INCOMES, incomes)
        self.store.touch_last_update()

    def create_income(
        self, name: str, value: float, income_type: IncomeType, month: Optional[date] = None
    ) -> Income:
        """Create an income template.

        Args:
            name: Income name
            value: Amount, must be positive
            income_type: Fixed (every month) or OneTime
            month: Any date inside the month of a one-time income

        Returns:
            The stored income

        Raises:
            ValidationError: If any field is invalid
        """
        name, value, income_type, income_month, income_year = self._validated_fields(
            name, value, income_type, month
        )
        income = Income(
            id=new_id(),
            name=name,
            value=value,
            income_type=income_type,
            created_at=datetime.now(UTC),
            month=income_month,
            year=income_year,
        )
        self.store.append(Collection.INCOMES, income)
        self.store.touch_last_update()
        logger.info("Created %s income %s", income_type.value, income.id)
        return income

    def get_income(self, income_id: str) -> Optional[Income]:
        """Get income by ID."""
        for income in self.store.load_incomes():
            if income.id == income_id:
                return income
        return None

    def list_incomes(self, include_inactive: bool = False) -> list[Income]:
        """List income templates.

        Args:
            include_inactive: If True, include soft-deleted incomes
        """
        incomes = self.store.load_incomes()
        if include_inactive:
            return incomes
        return [income for income in incomes if not income.is_inactive and income.deleted_at is None]

    def update_income(
        self,
        income_id: str,
        name: str,
        value: float,
        income_type: IncomeType,
        month: Optional[date] = None,
    ) -> Income:
        """Replace an income's fields, keeping its creation and deletion stamps.

        If the income no longer exists, the edit is stored as a new income.

        Raises:
            ValidationError: If any field is invalid
        """
        name, value, income_type, income_month, income_year = self._validated_fields(
            name, value, income_type, month
        )
        incomes = self.store.load_incomes()
        for index, existing in enumerate(incomes):
            if existing.id == income_id:
                updated = replace(
                    existing,
                    name=name,
                    value=value,
                    income_type=income_type,
                    month=income_month,
                    year=income_year,
                    excluded_months=existing.excluded_months if income_type == IncomeType.FIXED else frozenset(),
                )
                incomes[index] = updated
                self._save(incomes)
                logger.info("Updated income %s", income_id)
                return updated

        logger.warning("Income %s not found for update, saving edit as a new income", income_id)
        created = Income(
            id=new_id(),
            name=name,
            value=value,
            income_type=income_type,
            created_at=datetime.now(UTC),
            month=income_month,
            year=income_year,
        )
        incomes.append(created)
        self._save(incomes)
        return created

    def delete_income(self, income_id: str) -> Income:
        """Soft-delete an income.

        Raises:
            NotFoundError: If the income doesn't exist
        """
        incomes = self.store.load_incomes()
        for index, existing in enumerate(incomes):
            if existing.id == income_id:
                deleted = replace(existing, status=RecordStatus.INACTIVE, deleted_at=datetime.now(UTC))
                incomes[index] = deleted
                self._save(incomes)
                logger.info("Soft-deleted income %s", income_id)
                return deleted
        raise NotFoundError(record_not_found("income", income_id))

    def incomes_for_month(self, month: date, active_only: bool = True) -> list[IncomeOccurrence]:
        """Project stored incomes onto one month."""
        return project_incomes_for_month(month, self.store.load_incomes(), active_only=active_only)
