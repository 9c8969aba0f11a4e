"""Card management commands."""

import click
from monthbook.cli.card_resolution import resolve_card_or_exit
from monthbook.cli.error_handling import handle_domain_error
from monthbook.domain.card import CardService
from monthbook.domain.errors import DomainError


@click.group()
def card_group():
    """Manage credit cards."""
    pass


@card_group.command("add")
@click.argument("alias", metavar="ALIAS")
@click.option("--due-day", type=int, required=True, help="Billing day of the month (1-31)")
@click.pass_context
def add_card(ctx, alias: str, due_day: int):
    """Add a credit card.

    Examples:
        monthbook card add "Nubank" --due-day 10
    """
    service = CardService(ctx.obj["store"])
    try:
        card = service.create_card(alias=alias, due_day_of_month=due_day)
        click.echo(f"Created card '{card.alias}' (ID: {card.id}, due day {card.due_day_of_month})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include deleted cards")
@click.pass_context
def list_cards(ctx, include_inactive: bool):
    """List cards sorted by alias."""
    service = CardService(ctx.obj["store"])
    cards = service.list_cards(include_inactive=include_inactive)
    if not cards:
        click.echo("No cards found.")
        return

    click.echo("\nCards:")
    click.echo("-" * 60)
    for card in cards:
        suffix = " (deleted)" if card.is_inactive else ""
        click.echo(f"ID: {card.id:>13} | {card.alias:20s} | Due day: {card.due_day_of_month:2d}{suffix}")


@card_group.command("edit")
@click.argument("card", metavar="CARD")
@click.option("--alias", help="New alias")
@click.option("--due-day", type=int, help="New billing day (1-31)")
@click.pass_context
def edit_card(ctx, card: str, alias: str | None, due_day: int | None):
    """Edit a card.

    CARD can be a card alias or ID. Existing installments keep their due
    dates; the new billing day applies to purchases saved afterwards.

    Examples:
        monthbook card edit "Nubank" --due-day 15
    """
    service = CardService(ctx.obj["store"])
    card_obj = resolve_card_or_exit(ctx, service, card)
    try:
        updated = service.update_card(
            card_id=card_obj.id,
            alias=alias if alias is not None else card_obj.alias,
            due_day_of_month=due_day if due_day is not None else card_obj.due_day_of_month,
        )
        click.echo(f"Updated card '{updated.alias}' (due day {updated.due_day_of_month})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("delete")
@click.argument("card", metavar="CARD")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_card(ctx, card: str, yes: bool):
    """Delete a card (it will no longer be offered for new purchases).

    CARD can be a card alias or ID.
    """
    service = CardService(ctx.obj["store"])
    card_obj = resolve_card_or_exit(ctx, service, card)

    if not yes and not click.confirm(f"Are you sure you want to delete card '{card_obj.alias}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_card(card_obj.id)
        click.echo(f"Deleted card '{card_obj.alias}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register card commands with main CLI."""
    cli.add_command(card_group, name="card")
