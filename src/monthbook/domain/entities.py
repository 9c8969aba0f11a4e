"""Domain model entities for monthbook.

These are pure data classes representing stored templates and the
month-specific occurrences projected from them, independent of the JSON
layout used by the key-value store. Months are 1-based throughout the
Python API.
"""

from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import ClassVar, Optional, Union


class IncomeType(str, Enum):
    """Income template kind."""

    FIXED = "Fixed"
    ONE_TIME = "OneTime"


class PaymentMethod(str, Enum):
    """Discriminator for the expense template union."""

    DEBIT = "Debit"
    FIXED = "Fixed"
    CREDIT = "Credit"


class RecordStatus(str, Enum):
    """Lifecycle status for incomes and cards."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class ExpenseStatus(str, Enum):
    """Payment status for expenses; INACTIVE is the soft-delete state."""

    PENDING = "pending"
    PAID = "paid"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class Income:
    """Income template.

    One-time incomes carry ``month`` (1-12) and ``year``; fixed incomes repeat
    every month from their creation month except for ``excluded_months``.
    """

    id: str
    name: str
    value: float
    income_type: IncomeType
    created_at: datetime
    status: RecordStatus = RecordStatus.ACTIVE
    deleted_at: Optional[datetime] = None
    excluded_months: frozenset[str] = frozenset()
    month: Optional[int] = None
    year: Optional[int] = None

    @property
    def is_fixed(self) -> bool:
        return self.income_type == IncomeType.FIXED

    @property
    def is_inactive(self) -> bool:
        return self.status == RecordStatus.INACTIVE


@dataclass(frozen=True)
class DebitExpense:
    """Single-occurrence expense paid on the purchase date."""

    payment_method: ClassVar[PaymentMethod] = PaymentMethod.DEBIT

    id: str
    description: str
    value: float
    purchase_date: date
    created_at: datetime
    status: ExpenseStatus = ExpenseStatus.PENDING
    paid_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    @property
    def due_date(self) -> date:
        return self.purchase_date

    @property
    def is_inactive(self) -> bool:
        return self.status == ExpenseStatus.INACTIVE


@dataclass(frozen=True)
class FixedExpense:
    """Recurring expense due on ``due_day_of_month`` of every month."""

    payment_method: ClassVar[PaymentMethod] = PaymentMethod.FIXED

    id: str
    description: str
    value: float
    due_day_of_month: int
    created_at: datetime
    status: ExpenseStatus = ExpenseStatus.PENDING
    paid_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    excluded_months: frozenset[str] = frozenset()

    @property
    def is_inactive(self) -> bool:
        return self.status == ExpenseStatus.INACTIVE


@dataclass(frozen=True)
class CreditInstallment:
    """One materialized installment of a credit card purchase.

    All installments of a purchase share ``original_expense_id``; the id of
    each one is ``{original_expense_id}-{installment_number}``.
    """

    payment_method: ClassVar[PaymentMethod] = PaymentMethod.CREDIT

    id: str
    description: str
    value: float
    original_expense_id: str
    card_id: str
    purchase_date: date
    due_date: date
    installment_number: int
    total_installments: int
    created_at: datetime
    status: ExpenseStatus = ExpenseStatus.PENDING
    paid_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    @property
    def is_inactive(self) -> bool:
        return self.status == ExpenseStatus.INACTIVE


Expense = Union[DebitExpense, FixedExpense, CreditInstallment]


@dataclass(frozen=True)
class Card:
    """Credit card with its monthly billing day."""

    id: str
    alias: str
    due_day_of_month: int
    created_at: datetime
    status: RecordStatus = RecordStatus.ACTIVE
    deleted_at: Optional[datetime] = None

    @property
    def is_inactive(self) -> bool:
        return self.status == RecordStatus.INACTIVE


@dataclass(frozen=True)
class ExpenseOccurrence:
    """Expense as it appears in one projected month."""

    id: str
    template_id: str
    description: str
    value: float
    payment_method: PaymentMethod
    due_date: date
    status: ExpenseStatus
    created_at: datetime
    paid_at: Optional[datetime] = None
    card_id: Optional[str] = None
    installment_number: Optional[int] = None
    total_installments: Optional[int] = None


@dataclass(frozen=True)
class IncomeOccurrence:
    """Income as it appears in one projected month."""

    id: str
    template_id: str
    name: str
    value: float
    income_type: IncomeType
    month: date
    status: RecordStatus
    created_at: datetime


@dataclass(frozen=True)
class MonthSummary:
    """Income and expense totals for one month."""

    month: date
    income_total: float
    expense_total: float

    @property
    def net(self) -> float:
        return self.income_total - self.expense_total


@dataclass(frozen=True)
class MonthLedger:
    """A month's totals together with the occurrences behind them."""

    summary: MonthSummary
    incomes: tuple[IncomeOccurrence, ...]
    expenses: tuple[ExpenseOccurrence, ...]

    @property
    def month(self) -> date:
        return self.summary.month


@dataclass(frozen=True)
class ClearMonthResult:
    """Counts of records touched by a clear-month operation."""

    month: date
    excluded_fixed: int
    deactivated: int
