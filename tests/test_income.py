"""Tests for income management."""

from datetime import date, datetime, UTC

import pytest

from monthbook.domain.entities import Income, IncomeType, RecordStatus
from monthbook.domain.errors import NotFoundError, ValidationError
from monthbook.storage.records import Collection


def test_create_fixed_income(income_service):
    income = income_service.create_income("Salary", 5000, IncomeType.FIXED)
    assert income.value == 5000.0
    assert income.is_fixed
    assert income.month is None
    assert income_service.get_income(income.id) == income


def test_create_one_time_income(income_service):
    income = income_service.create_income("Bonus", "750.50", "OneTime", month=date(2024, 4, 18))
    assert income.income_type == IncomeType.ONE_TIME
    assert income.value == 750.5
    assert (income.month, income.year) == (4, 2024)


def test_one_time_income_requires_month(income_service):
    with pytest.raises(ValidationError):
        income_service.create_income("Bonus", 100, IncomeType.ONE_TIME)


@pytest.mark.parametrize("value", [0, -5, "abc", None, float("nan")])
def test_invalid_value_rejected_without_write(income_service, record_store, value):
    with pytest.raises(ValidationError):
        income_service.create_income("Salary", value, IncomeType.FIXED)
    assert record_store.load_incomes() == []
    assert record_store.last_update() is None


def test_unknown_income_type(income_service):
    with pytest.raises(ValidationError):
        income_service.create_income("Salary", 10, "Weekly")


def test_incomes_for_month(income_service):
    income_service.create_income("Bonus", 100, IncomeType.ONE_TIME, month=date(2024, 4, 1))
    assert [occ.name for occ in income_service.incomes_for_month(date(2024, 4, 1))] == ["Bonus"]
    assert income_service.incomes_for_month(date(2024, 5, 1)) == []


def test_update_income_keeps_creation(income_service):
    income = income_service.create_income("Salary", 5000, IncomeType.FIXED)
    updated = income_service.update_income(income.id, "Salary", 5500, IncomeType.FIXED)
    assert updated.id == income.id
    assert updated.created_at == income.created_at
    assert income_service.get_income(income.id).value == 5500.0
    assert len(income_service.list_incomes()) == 1


def test_update_to_one_time_drops_exclusions(income_service, record_store):
    income = Income(
        id="1",
        name="Salary",
        value=5000.0,
        income_type=IncomeType.FIXED,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        excluded_months=frozenset({"04/2024"}),
    )
    record_store.save_all(Collection.INCOMES, [income])

    updated = income_service.update_income("1", "Salary", 5000, IncomeType.ONE_TIME, month=date(2024, 6, 1))
    assert updated.excluded_months == frozenset()
    assert (updated.month, updated.year) == (6, 2024)
    assert updated.created_at == income.created_at

    fixed_again = income_service.update_income("1", "Salary", 5000, IncomeType.FIXED)
    assert fixed_again.month is None
    assert fixed_again.year is None


def test_update_missing_income_creates_new(income_service):
    created = income_service.update_income("missing", "Gift", 50, IncomeType.FIXED)
    assert created.id != "missing"
    assert income_service.get_income(created.id) is not None


def test_delete_income_is_soft(income_service):
    income = income_service.create_income("Salary", 5000, IncomeType.FIXED)
    deleted = income_service.delete_income(income.id)
    assert deleted.status == RecordStatus.INACTIVE
    assert deleted.deleted_at is not None
    assert income_service.list_incomes() == []
    assert len(income_service.list_incomes(include_inactive=True)) == 1


def test_delete_missing_income(income_service):
    with pytest.raises(NotFoundError):
        income_service.delete_income("missing")


def test_writes_touch_last_update(income_service, record_store):
    income_service.create_income("Salary", 5000, IncomeType.FIXED)
    assert record_store.last_update() is not None
