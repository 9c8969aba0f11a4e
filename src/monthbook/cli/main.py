"""Main CLI entry point."""

import logging

import click
from monthbook.storage.factories import create_sqlite_store
from monthbook.storage.records import RecordStore

# Import and register all commands at module level
from monthbook.cli.commands import card, expense, income, month, wipe


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides MONTHBOOK_DB_PATH environment variable)",
    envvar="MONTHBOOK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Monthbook - Monthly income and expense tracker.

    Record incomes, debit, fixed and credit card expenses, and browse the
    resulting month-by-month ledger.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        kv_store = create_sqlite_store(database_path=db_path)
        kv_store.connect()
        kv_store.initialize_schema()
        ctx.call_on_close(kv_store.disconnect)
        ctx.obj["store"] = RecordStore(kv_store)


# Register all commands
income.register_commands(cli)
expense.register_commands(cli)
card.register_commands(cli)
month.register_commands(cli)
wipe.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
