"""CLI helpers for month and date argument resolution."""

from datetime import date

import click

from monthbook.utils.amount_parser import parse_amount
from monthbook.utils.date_parser import parse_date, parse_month
from monthbook.utils.months import month_start


def resolve_month_or_exit(ctx: click.Context, month: str | None) -> date:
    """Parse a month argument, defaulting to the current month."""
    if month is None:
        return month_start(date.today())
    try:
        return parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)


def resolve_date_or_exit(ctx: click.Context, value: str | None) -> date:
    """Parse a date argument, defaulting to today."""
    if value is None:
        return date.today()
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def resolve_amount_or_exit(ctx: click.Context, amount: str) -> float:
    """Parse an amount argument."""
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
