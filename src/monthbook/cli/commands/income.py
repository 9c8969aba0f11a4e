"""Income management commands."""

import click
from monthbook.cli.error_handling import handle_domain_error
from monthbook.cli.month_filters import resolve_amount_or_exit, resolve_month_or_exit
from monthbook.domain.entities import IncomeType
from monthbook.domain.errors import DomainError
from monthbook.domain.income import IncomeService
from monthbook.utils.amount_parser import format_money
from monthbook.utils.months import month_key

INCOME_TYPE_CHOICES = {"fixed": IncomeType.FIXED, "one-time": IncomeType.ONE_TIME}


@click.group()
def income_group():
    """Manage incomes."""
    pass


@income_group.command("add")
@click.argument("name", metavar="NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option(
    "--type",
    "income_type",
    type=click.Choice(list(INCOME_TYPE_CHOICES)),
    default="fixed",
    show_default=True,
    help="Fixed incomes repeat every month; one-time incomes belong to --month",
)
@click.option("--month", help="Month of a one-time income (MM/YYYY, 'this month', ...)")
@click.pass_context
def add_income(ctx, name: str, amount: str, income_type: str, month: str | None):
    """Add an income.

    Examples:
        monthbook income add "Salary" 5000
        monthbook income add "Sold bike" "350,00" --type one-time --month 04/2024
    """
    service = IncomeService(ctx.obj["store"])
    value = resolve_amount_or_exit(ctx, amount)
    income_month = resolve_month_or_exit(ctx, month)

    try:
        income = service.create_income(
            name=name,
            value=value,
            income_type=INCOME_TYPE_CHOICES[income_type],
            month=income_month,
        )
        click.echo(f"Created income '{income.name}' (ID: {income.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@income_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include deleted incomes")
@click.pass_context
def list_incomes(ctx, include_inactive: bool):
    """List income templates."""
    service = IncomeService(ctx.obj["store"])
    incomes = service.list_incomes(include_inactive=include_inactive)
    if not incomes:
        click.echo("No incomes found.")
        return

    click.echo("\nIncomes:")
    click.echo("-" * 70)
    for income in incomes:
        if income.is_fixed:
            when = "every month"
        else:
            when = f"{income.month:02d}/{income.year}"
        suffix = " (deleted)" if income.is_inactive else ""
        click.echo(
            f"ID: {income.id:>13} | {income.name:20s} | {format_money(income.value):>12} | {when}{suffix}"
        )
        if income.excluded_months:
            click.echo(f"{'':18}excluded: {', '.join(sorted(income.excluded_months, key=_month_sort_key))}")


def _month_sort_key(key: str) -> tuple[str, str]:
    month, year = key.split("/")
    return year, month


@income_group.command("edit")
@click.argument("income_id", metavar="INCOME_ID")
@click.option("--name", help="New name")
@click.option("--amount", help="New amount")
@click.option("--type", "income_type", type=click.Choice(list(INCOME_TYPE_CHOICES)), help="New income type")
@click.option("--month", help="Month of a one-time income")
@click.pass_context
def edit_income(
    ctx, income_id: str, name: str | None, amount: str | None, income_type: str | None, month: str | None
):
    """Edit an income.

    Only the provided fields change.

    Examples:
        monthbook income edit 1718900000000 --amount 5200
    """
    service = IncomeService(ctx.obj["store"])
    existing = service.get_income(income_id)
    if existing is None:
        click.echo(f"Warning: income '{income_id}' not found, the edit will be saved as a new income.", err=True)
        if name is None or amount is None:
            click.echo("Error: --name and --amount are required when creating a new income.", err=True)
            ctx.exit(1)

    value = resolve_amount_or_exit(ctx, amount) if amount is not None else existing.value
    new_type = INCOME_TYPE_CHOICES[income_type] if income_type is not None else (
        existing.income_type if existing is not None else IncomeType.FIXED
    )
    if month is not None:
        income_month = resolve_month_or_exit(ctx, month)
    elif existing is not None and existing.month is not None:
        income_month = resolve_month_or_exit(ctx, f"{existing.month:02d}/{existing.year}")
    else:
        income_month = resolve_month_or_exit(ctx, None)

    try:
        updated = service.update_income(
            income_id=income_id,
            name=name if name is not None else existing.name,
            value=value,
            income_type=new_type,
            month=income_month,
        )
        click.echo(f"Updated income '{updated.name}' (ID: {updated.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@income_group.command("delete")
@click.argument("income_id", metavar="INCOME_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_income(ctx, income_id: str, yes: bool):
    """Delete an income.

    A deleted fixed income disappears from the ledger; totals of months
    before the deletion still count it. Use 'month clear' to drop a single
    month instead.
    """
    service = IncomeService(ctx.obj["store"])
    if not yes and not click.confirm(f"Are you sure you want to delete income '{income_id}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.delete_income(income_id)
        click.echo(f"Deleted income '{deleted.name}' as of {month_key(deleted.deleted_at)}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
