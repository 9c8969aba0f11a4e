"""Credit card installment due-date calculation."""

from datetime import date

from monthbook.utils.months import last_day_of_month


def _validate_due_day(card_due_day: int) -> None:
    if not isinstance(card_due_day, int) or isinstance(card_due_day, bool) or not 1 <= card_due_day <= 31:
        raise ValueError(f"Card due day must be between 1 and 31, got {card_due_day!r}")


def _clamped(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, last_day_of_month(year, month)))


def first_installment_due_date(purchase_date: date, card_due_day: int) -> date:
    """Compute the due date of the first installment of a purchase.

    A purchase made on or after the card's due day belongs to the next
    billing cycle. The day is clamped to the last day of the target month.

    Args:
        purchase_date: Date of the purchase
        card_due_day: Card billing day (1-31)

    Returns:
        Due date of the first installment

    Raises:
        ValueError: If card_due_day is outside 1-31
    """
    _validate_due_day(card_due_day)
    year, month = purchase_date.year, purchase_date.month
    if purchase_date.day >= card_due_day:
        month += 1
        if month > 12:
            month = 1
            year += 1
    return _clamped(year, month, card_due_day)


def next_installment_due_date(previous_due_date: date, card_due_day: int) -> date:
    """Advance exactly one calendar month from the previous installment.

    Raises:
        ValueError: If card_due_day is outside 1-31
    """
    _validate_due_day(card_due_day)
    year, month = previous_due_date.year, previous_due_date.month + 1
    if month > 12:
        month = 1
        year += 1
    return _clamped(year, month, card_due_day)


def installment_due_dates(purchase_date: date, card_due_day: int, count: int) -> list[date]:
    """Return the due dates of a ``count``-installment purchase, in order."""
    if count < 1:
        raise ValueError(f"Installment count must be at least 1, got {count}")
    due_dates = [first_installment_due_date(purchase_date, card_due_day)]
    while len(due_dates) < count:
        due_dates.append(next_installment_due_date(due_dates[-1], card_due_day))
    return due_dates
