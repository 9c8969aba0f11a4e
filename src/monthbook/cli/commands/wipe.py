"""Permanent data wipe command."""

import click
from monthbook.cli.error_handling import handle_domain_error
from monthbook.domain.errors import DomainError
from monthbook.domain.ledger import LedgerService
from monthbook.storage.records import Collection

WIPE_TARGETS = ["incomes", "expenses", "cards", "all"]


@click.command("wipe")
@click.argument("target", type=click.Choice(WIPE_TARGETS))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def wipe(ctx, target: str, yes: bool):
    """PERMANENTLY delete stored data.

    Unlike 'delete' and 'month clear', this removes the records themselves,
    including their history. It cannot be undone.

    Examples:
        monthbook wipe expenses
        monthbook wipe all --yes
    """
    if not yes and not click.confirm(
        f"Permanently delete {'all data' if target == 'all' else 'all ' + target}? This cannot be undone"
    ):
        click.echo("Wipe cancelled.")
        return

    service = LedgerService(ctx.obj["store"])
    try:
        if target == "all":
            service.wipe_all()
        else:
            service.wipe_collection(Collection(target))
        click.echo(f"Permanently deleted {target}.")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register wipe command with main CLI."""
    cli.add_command(wipe, name="wipe")
