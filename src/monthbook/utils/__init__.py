"""Utility functions for monthbook."""

from monthbook.utils.date_parser import parse_date, parse_month
from monthbook.utils.amount_parser import parse_amount, format_money
from monthbook.utils.months import last_day_of_month, month_key, month_sequence
from monthbook.utils.due_dates import first_installment_due_date, next_installment_due_date

__all__ = [
    "parse_date",
    "parse_month",
    "parse_amount",
    "format_money",
    "last_day_of_month",
    "month_key",
    "month_sequence",
    "first_installment_due_date",
    "next_installment_due_date",
]
