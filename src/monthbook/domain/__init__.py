"""Domain layer for monthbook application."""

from monthbook.domain.income import IncomeService
from monthbook.domain.expense import ExpenseService
from monthbook.domain.card import CardService
from monthbook.domain.ledger import LedgerService
from monthbook.domain.summary import SummaryService

__all__ = [
    "IncomeService",
    "ExpenseService",
    "CardService",
    "LedgerService",
    "SummaryService",
]
