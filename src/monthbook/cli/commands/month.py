"""Monthly ledger commands."""

import click
from monthbook.cli.error_handling import handle_domain_error
from monthbook.cli.month_filters import resolve_month_or_exit
from monthbook.domain.entities import PaymentMethod
from monthbook.domain.errors import DomainError
from monthbook.domain.ledger import LedgerService
from monthbook.domain.summary import SummaryService
from monthbook.utils.amount_parser import format_money
from monthbook.utils.months import month_key


@click.group()
def month_group():
    """Browse and clean the monthly ledger."""
    pass


@month_group.command("list")
@click.option("--before", type=click.IntRange(min=0), default=12, show_default=True, help="Months to look back")
@click.option("--after", type=click.IntRange(min=0), default=12, show_default=True, help="Months to look ahead")
@click.pass_context
def list_months(ctx, before: int, after: int):
    """List months with activity and their totals.

    The current month is always listed, even when empty.
    """
    service = SummaryService(ctx.obj["store"])
    ledgers = service.month_ledgers(months_before=before, months_after=after)

    click.echo(f"\n{'Month':8s} | {'Income':>12} | {'Expenses':>12} | {'Net':>12}")
    click.echo("-" * 54)
    for ledger in ledgers:
        summary = ledger.summary
        click.echo(
            f"{month_key(summary.month):8s} | {format_money(summary.income_total):>12} | "
            f"{format_money(summary.expense_total):>12} | {format_money(summary.net):>12}"
        )


@month_group.command("show")
@click.argument("month", metavar="MONTH", required=False)
@click.pass_context
def show_month(ctx, month: str | None):
    """Show the incomes, expenses and totals of one month.

    MONTH defaults to the current month.

    Examples:
        monthbook month show
        monthbook month show 04/2024
        monthbook month show "last month"
    """
    target = resolve_month_or_exit(ctx, month)
    ledger = SummaryService(ctx.obj["store"]).month_ledger(target)

    click.echo(f"\nLedger for {month_key(target)}")
    click.echo("=" * 70)

    click.echo("\nIncomes:")
    if not ledger.incomes:
        click.echo("  (none)")
    for income in ledger.incomes:
        click.echo(f"  {income.name:30s} {format_money(income.value):>12}  [{income.income_type.value}]")

    click.echo("\nExpenses:")
    if not ledger.expenses:
        click.echo("  (none)")
    for expense in ledger.expenses:
        label = expense.description
        if expense.installment_number is not None:
            label = f"{label} ({expense.installment_number}/{expense.total_installments})"
        # Fixed rows show the template id accepted by the expense commands
        expense_ref = expense.template_id if expense.payment_method == PaymentMethod.FIXED else expense.id
        click.echo(
            f"  {expense.due_date.strftime('%d/%m/%Y')}  {label:30s} {format_money(expense.value):>12}  "
            f"[{expense.payment_method.value}, {expense.status.value}]  {expense_ref}"
        )

    summary = ledger.summary
    click.echo("-" * 70)
    click.echo(f"Total income:   {format_money(summary.income_total):>12}")
    click.echo(f"Total expenses: {format_money(summary.expense_total):>12}")
    click.echo(f"Net:            {format_money(summary.net):>12}")


@month_group.command("clear")
@click.argument("month", metavar="MONTH")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_month(ctx, month: str, yes: bool):
    """Remove every income and expense from one month.

    Fixed incomes and expenses are skipped for this month only and keep
    recurring in other months. Everything else in the month is deleted.

    Examples:
        monthbook month clear 04/2024
    """
    target = resolve_month_or_exit(ctx, month)
    if not yes and not click.confirm(f"Clear every income and expense of {month_key(target)}?"):
        click.echo("Clear cancelled.")
        return

    try:
        result = LedgerService(ctx.obj["store"]).clear_month(target)
        click.echo(
            f"Cleared {month_key(result.month)}: {result.excluded_fixed} fixed item(s) skipped, "
            f"{result.deactivated} item(s) deleted"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register month commands with main CLI."""
    cli.add_command(month_group, name="month")
