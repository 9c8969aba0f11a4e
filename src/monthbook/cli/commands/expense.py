"""Expense management commands."""

import click
from monthbook.cli.card_resolution import resolve_card_or_exit
from monthbook.cli.error_handling import handle_domain_error
from monthbook.cli.month_filters import resolve_amount_or_exit, resolve_date_or_exit
from monthbook.domain.card import CardService
from monthbook.domain.entities import CreditInstallment, FixedExpense
from monthbook.domain.errors import DomainError
from monthbook.domain.expense import ExpenseService
from monthbook.utils.amount_parser import format_money


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add-debit")
@click.argument("description", metavar="DESCRIPTION")
@click.argument("amount", metavar="AMOUNT")
@click.option("--date", "purchase_date", help="Purchase date (YYYY-MM-DD or 'today', 'yesterday')")
@click.pass_context
def add_debit(ctx, description: str, amount: str, purchase_date: str | None):
    """Add a one-off debit expense.

    Examples:
        monthbook expense add-debit "Groceries" 210.35 --date 2024-03-02
    """
    service = ExpenseService(ctx.obj["store"])
    value = resolve_amount_or_exit(ctx, amount)
    when = resolve_date_or_exit(ctx, purchase_date)
    try:
        expense = service.create_debit_expense(description=description, value=value, purchase_date=when)
        click.echo(f"Created debit expense '{expense.description}' (ID: {expense.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("add-fixed")
@click.argument("description", metavar="DESCRIPTION")
@click.argument("amount", metavar="AMOUNT")
@click.option("--due-day", type=int, required=True, help="Day of the month the expense is due (1-31)")
@click.pass_context
def add_fixed(ctx, description: str, amount: str, due_day: int):
    """Add a fixed expense that repeats every month.

    Examples:
        monthbook expense add-fixed "Rent" 1200 --due-day 5
    """
    service = ExpenseService(ctx.obj["store"])
    value = resolve_amount_or_exit(ctx, amount)
    try:
        expense = service.create_fixed_expense(description=description, value=value, due_day_of_month=due_day)
        click.echo(f"Created fixed expense '{expense.description}' (ID: {expense.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("add-credit")
@click.argument("description", metavar="DESCRIPTION")
@click.argument("amount", metavar="TOTAL_AMOUNT")
@click.option("--card", required=True, help="Card alias or ID")
@click.option("--installments", type=int, default=1, show_default=True, help="Number of installments")
@click.option("--date", "purchase_date", help="Purchase date (YYYY-MM-DD or 'today', 'yesterday')")
@click.pass_context
def add_credit(ctx, description: str, amount: str, card: str, installments: int, purchase_date: str | None):
    """Add a credit card purchase split into installments.

    TOTAL_AMOUNT is split evenly; due dates follow the card's billing day.

    Examples:
        monthbook expense add-credit "Laptop" 3000 --card "Nubank" --installments 10
    """
    store = ctx.obj["store"]
    service = ExpenseService(store)
    card_obj = resolve_card_or_exit(ctx, CardService(store), card)
    value = resolve_amount_or_exit(ctx, amount)
    when = resolve_date_or_exit(ctx, purchase_date)
    try:
        created = service.create_credit_expense(
            description=description,
            total_value=value,
            purchase_date=when,
            card_id=card_obj.id,
            installments=installments,
        )
        click.echo(
            f"Created credit purchase '{description}' (ID: {created[0].original_expense_id}) "
            f"with {len(created)} installment{'s' if len(created) != 1 else ''}"
        )
        for installment in created:
            click.echo(
                f"  {installment.installment_number}/{installment.total_installments} "
                f"due {installment.due_date.isoformat()} | {format_money(installment.value)}"
            )
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include deleted expenses")
@click.pass_context
def list_expenses(ctx, include_inactive: bool):
    """List stored expenses and credit installments."""
    service = ExpenseService(ctx.obj["store"])
    expenses = service.list_expenses(include_inactive=include_inactive)
    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo("\nExpenses:")
    click.echo("-" * 80)
    for expense in expenses:
        if isinstance(expense, FixedExpense):
            when = f"every month on day {expense.due_day_of_month}"
        elif isinstance(expense, CreditInstallment):
            when = (
                f"due {expense.due_date.isoformat()} "
                f"({expense.installment_number}/{expense.total_installments})"
            )
        else:
            when = f"due {expense.due_date.isoformat()}"
        click.echo(
            f"ID: {expense.id:>15} | {expense.payment_method.value:6s} | {expense.description:20s} | "
            f"{format_money(expense.value):>12} | {when} | {expense.status.value}"
        )


@expense_group.command("edit")
@click.argument("expense_id", metavar="EXPENSE_ID")
@click.option("--description", help="New description")
@click.option("--amount", help="New amount (the purchase total for credit expenses)")
@click.option("--date", "purchase_date", help="New purchase date (debit and credit)")
@click.option("--due-day", type=int, help="New due day (fixed)")
@click.option("--card", help="New card alias or ID (credit)")
@click.option("--installments", type=int, help="New number of installments (credit)")
@click.pass_context
def edit_expense(
    ctx,
    expense_id: str,
    description: str | None,
    amount: str | None,
    purchase_date: str | None,
    due_day: int | None,
    card: str | None,
    installments: int | None,
):
    """Edit an expense.

    EXPENSE_ID may be any installment of a credit purchase; the whole
    purchase is then regenerated from the edited values.

    Examples:
        monthbook expense edit 1718900000000 --amount 1250
        monthbook expense edit 1718900000000-1 --installments 6
    """
    store = ctx.obj["store"]
    service = ExpenseService(store)
    existing = service.get_expense(expense_id)
    if existing is None:
        click.echo(f"Error: Expense '{expense_id}' not found", err=True)
        ctx.exit(1)

    new_description = description if description is not None else existing.description

    try:
        if isinstance(existing, CreditInstallment):
            total = (
                resolve_amount_or_exit(ctx, amount)
                if amount is not None
                else existing.value * existing.total_installments
            )
            card_id = resolve_card_or_exit(ctx, CardService(store), card).id if card is not None else existing.card_id
            regenerated = service.update_credit_expense(
                original_expense_id=existing.original_expense_id,
                description=new_description,
                total_value=total,
                purchase_date=(
                    resolve_date_or_exit(ctx, purchase_date) if purchase_date is not None else existing.purchase_date
                ),
                card_id=card_id,
                installments=installments if installments is not None else existing.total_installments,
            )
            click.echo(
                f"Updated credit purchase '{new_description}' ({len(regenerated)} installments regenerated)"
            )
        elif isinstance(existing, FixedExpense):
            updated = service.update_fixed_expense(
                expense_id=expense_id,
                description=new_description,
                value=resolve_amount_or_exit(ctx, amount) if amount is not None else existing.value,
                due_day_of_month=due_day if due_day is not None else existing.due_day_of_month,
            )
            click.echo(f"Updated fixed expense '{updated.description}'")
        else:
            updated = service.update_debit_expense(
                expense_id=expense_id,
                description=new_description,
                value=resolve_amount_or_exit(ctx, amount) if amount is not None else existing.value,
                purchase_date=(
                    resolve_date_or_exit(ctx, purchase_date) if purchase_date is not None else existing.purchase_date
                ),
            )
            click.echo(f"Updated debit expense '{updated.description}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("delete")
@click.argument("expense_id", metavar="EXPENSE_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: str, yes: bool):
    """Delete an expense.

    Deleting a credit installment deletes every installment of the purchase.
    Use 'month clear' to drop a fixed expense for a single month.
    """
    service = ExpenseService(ctx.obj["store"])
    if not yes and not click.confirm(f"Are you sure you want to delete expense '{expense_id}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.delete_expense(expense_id)
        click.echo(f"Deleted {len(deleted)} expense record{'s' if len(deleted) != 1 else ''}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("pay")
@click.argument("expense_id", metavar="EXPENSE_ID")
@click.pass_context
def pay_expense(ctx, expense_id: str):
    """Mark a debit expense or credit installment as paid."""
    service = ExpenseService(ctx.obj["store"])
    try:
        updated = service.mark_paid(expense_id)
        click.echo(f"Marked '{updated.description}' as paid")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("unpay")
@click.argument("expense_id", metavar="EXPENSE_ID")
@click.pass_context
def unpay_expense(ctx, expense_id: str):
    """Mark a debit expense or credit installment as pending again."""
    service = ExpenseService(ctx.obj["store"])
    try:
        updated = service.mark_pending(expense_id)
        click.echo(f"Marked '{updated.description}' as pending")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
