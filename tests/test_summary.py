"""Tests for monthly totals and ledgers."""

from datetime import date, datetime, UTC

import pytest

from monthbook.domain.entities import (
    CreditInstallment,
    DebitExpense,
    ExpenseStatus,
    FixedExpense,
    Income,
    IncomeType,
    RecordStatus,
)
from monthbook.domain.summary import (
    build_month_ledger,
    income_counts_in_month,
    summarize_month,
    total_expense_for_month,
    total_income_for_month,
)
from monthbook.storage.records import Collection


def _utc(year, month, day):
    return datetime(year, month, day, 9, tzinfo=UTC)


def _salary(**overrides):
    fields = dict(
        id="1",
        name="Salary",
        value=5000.0,
        income_type=IncomeType.FIXED,
        created_at=_utc(2024, 1, 5),
    )
    fields.update(overrides)
    return Income(**fields)


def _bonus(**overrides):
    fields = dict(
        id="2",
        name="Bonus",
        value=750.0,
        income_type=IncomeType.ONE_TIME,
        created_at=_utc(2024, 1, 5),
        month=4,
        year=2024,
    )
    fields.update(overrides)
    return Income(**fields)


def _expenses():
    return [
        FixedExpense(
            id="10",
            description="Rent",
            value=1200.0,
            due_day_of_month=5,
            created_at=_utc(2024, 2, 1),
        ),
        DebitExpense(
            id="11",
            description="Groceries",
            value=250.0,
            purchase_date=date(2024, 4, 12),
            created_at=_utc(2024, 4, 12),
        ),
        CreditInstallment(
            id="12-1",
            description="Phone",
            value=150.0,
            original_expense_id="12",
            card_id="7",
            purchase_date=date(2024, 3, 20),
            due_date=date(2024, 4, 10),
            installment_number=1,
            total_installments=2,
            created_at=_utc(2024, 3, 20),
        ),
        CreditInstallment(
            id="12-2",
            description="Phone",
            value=150.0,
            original_expense_id="12",
            card_id="7",
            purchase_date=date(2024, 3, 20),
            due_date=date(2024, 5, 10),
            installment_number=2,
            total_installments=2,
            created_at=_utc(2024, 3, 20),
        ),
    ]


class TestIncomeCounting:
    """Which incomes count toward a month."""

    def test_fixed_counts_from_creation_month(self):
        income = _salary()
        assert not income_counts_in_month(income, date(2023, 12, 1))
        assert income_counts_in_month(income, date(2024, 1, 1))
        assert income_counts_in_month(income, date(2026, 8, 1))

    def test_deleted_fixed_keeps_earlier_months(self):
        income = _salary(status=RecordStatus.INACTIVE, deleted_at=_utc(2024, 5, 20))
        assert income_counts_in_month(income, date(2024, 4, 1))
        assert not income_counts_in_month(income, date(2024, 5, 1))
        assert not income_counts_in_month(income, date(2024, 6, 1))

    def test_inactive_fixed_without_deletion_never_counts(self):
        income = _salary(status=RecordStatus.INACTIVE)
        assert not income_counts_in_month(income, date(2024, 3, 1))

    def test_one_time_counts_only_in_its_month_while_active(self):
        assert income_counts_in_month(_bonus(), date(2024, 4, 1))
        assert not income_counts_in_month(_bonus(), date(2024, 5, 1))
        assert not income_counts_in_month(_bonus(status=RecordStatus.INACTIVE), date(2024, 4, 1))
        assert not income_counts_in_month(_bonus(deleted_at=_utc(2024, 4, 30)), date(2024, 4, 1))


def test_totals_for_month():
    incomes = [_salary(), _bonus()]
    expenses = _expenses()
    assert total_income_for_month(date(2024, 4, 1), incomes) == 5750.0
    assert total_income_for_month(date(2024, 5, 1), incomes) == 5000.0
    assert total_expense_for_month(date(2024, 4, 1), expenses) == 1600.0
    assert total_expense_for_month(date(2024, 5, 1), expenses) == 1350.0
    assert total_expense_for_month(date(2024, 1, 1), expenses) == 0.0


def test_inactive_expenses_excluded_from_total():
    expenses = _expenses()
    expenses[1] = DebitExpense(
        id="11",
        description="Groceries",
        value=250.0,
        purchase_date=date(2024, 4, 12),
        created_at=_utc(2024, 4, 12),
        status=ExpenseStatus.INACTIVE,
    )
    assert total_expense_for_month(date(2024, 4, 1), expenses) == 1350.0


def test_paid_expenses_still_count():
    expenses = _expenses()
    expenses[1] = DebitExpense(
        id="11",
        description="Groceries",
        value=250.0,
        purchase_date=date(2024, 4, 12),
        created_at=_utc(2024, 4, 12),
        status=ExpenseStatus.PAID,
        paid_at=_utc(2024, 4, 12),
    )
    assert total_expense_for_month(date(2024, 4, 1), expenses) == 1600.0


def test_summary_net():
    summary = summarize_month(date(2024, 4, 17), [_salary(), _bonus()], _expenses())
    assert summary.month == date(2024, 4, 1)
    assert summary.income_total == 5750.0
    assert summary.expense_total == 1600.0
    assert summary.net == 4150.0


def test_net_can_be_negative():
    summary = summarize_month(date(2024, 4, 1), [], _expenses())
    assert summary.net == -1600.0


def test_excluded_month_only_affects_that_month():
    income = _salary(excluded_months=frozenset({"04/2024"}))
    assert total_income_for_month(date(2024, 3, 1), [income]) == 5000.0
    assert total_income_for_month(date(2024, 4, 1), [income]) == 0.0
    assert total_income_for_month(date(2024, 5, 1), [income]) == 5000.0


def test_ledger_contains_occurrences_behind_totals():
    ledger = build_month_ledger(date(2024, 4, 1), [_salary(), _bonus()], _expenses())
    assert ledger.month == date(2024, 4, 1)
    assert [occ.name for occ in ledger.incomes] == ["Salary", "Bonus"]
    assert [occ.description for occ in ledger.expenses] == ["Rent", "Phone", "Groceries"]
    assert sum(occ.value for occ in ledger.expenses) == ledger.summary.expense_total


class TestSummaryService:
    """Totals computed from stored records."""

    @pytest.fixture
    def stored(self, record_store):
        record_store.save_all(Collection.INCOMES, [_salary(), _bonus()])
        record_store.save_all(Collection.EXPENSES, _expenses())
        return record_store

    def test_month_summary(self, stored, summary_service):
        summary = summary_service.month_summary(date(2024, 4, 1))
        assert summary.income_total == 5750.0
        assert summary.expense_total == 1600.0

    def test_month_ledger(self, stored, summary_service):
        ledger = summary_service.month_ledger(date(2024, 5, 3))
        assert ledger.summary.net == 3650.0
        assert len(ledger.expenses) == 2

    def test_visible_months(self, stored, summary_service):
        months = summary_service.visible_months(today=date(2024, 4, 15), months_before=6, months_after=3)
        assert months[0] == date(2024, 1, 1)
        assert months[-1] == date(2024, 7, 1)
        assert date(2024, 4, 1) in months

    def test_month_ledgers_match_visible_months(self, stored, summary_service):
        ledgers = summary_service.month_ledgers(today=date(2024, 4, 15), months_before=2, months_after=1)
        assert [ledger.month for ledger in ledgers] == [
            date(2024, 2, 1),
            date(2024, 3, 1),
            date(2024, 4, 1),
            date(2024, 5, 1),
        ]

    def test_empty_store(self, summary_service):
        summary = summary_service.month_summary(date(2024, 4, 1))
        assert summary.income_total == 0.0
        assert summary.expense_total == 0.0
        assert summary_service.visible_months(today=date(2024, 4, 15)) == [date(2024, 4, 1)]
