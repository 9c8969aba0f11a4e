"""Tests for entity helpers."""

from datetime import date, datetime, UTC

import pytest

from monthbook.domain.entities import (
    Card,
    CreditInstallment,
    DebitExpense,
    ExpenseStatus,
    FixedExpense,
    MonthSummary,
    PaymentMethod,
    RecordStatus,
)

CREATED = datetime(2024, 1, 1, tzinfo=UTC)


def test_payment_method_per_variant():
    debit = DebitExpense(id="1", description="Coffee", value=4.0, purchase_date=date(2024, 1, 2), created_at=CREATED)
    fixed = FixedExpense(id="2", description="Rent", value=900.0, due_day_of_month=5, created_at=CREATED)
    credit = CreditInstallment(
        id="3-1",
        description="TV",
        value=100.0,
        original_expense_id="3",
        card_id="9",
        purchase_date=date(2024, 1, 2),
        due_date=date(2024, 1, 10),
        installment_number=1,
        total_installments=1,
        created_at=CREATED,
    )
    assert debit.payment_method == PaymentMethod.DEBIT
    assert fixed.payment_method == PaymentMethod.FIXED
    assert credit.payment_method == PaymentMethod.CREDIT
    assert debit.due_date == date(2024, 1, 2)


def test_entities_are_immutable():
    card = Card(id="1", alias="Visa", due_day_of_month=10, created_at=CREATED)
    with pytest.raises(AttributeError):
        card.alias = "Master"


def test_inactive_flags():
    card = Card(id="1", alias="Visa", due_day_of_month=10, created_at=CREATED, status=RecordStatus.INACTIVE)
    expense = DebitExpense(
        id="1",
        description="Coffee",
        value=4.0,
        purchase_date=date(2024, 1, 2),
        created_at=CREATED,
        status=ExpenseStatus.INACTIVE,
    )
    assert card.is_inactive
    assert expense.is_inactive


def test_month_summary_net():
    assert MonthSummary(month=date(2024, 1, 1), income_total=100.0, expense_total=40.0).net == 60.0


def test_domain_package_exports_services():
    import monthbook.domain as domain
    from monthbook.domain.card import CardService
    from monthbook.domain.summary import SummaryService

    assert domain.CardService is CardService
    assert domain.SummaryService is SummaryService
    assert set(domain.__all__) == {
        "IncomeService",
        "ExpenseService",
        "CardService",
        "LedgerService",
        "SummaryService",
    }
