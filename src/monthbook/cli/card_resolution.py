"""CLI helpers for card resolution."""

from __future__ import annotations

import click
from monthbook.domain.card import CardService
from monthbook.domain.entities import Card
from monthbook.domain.errors import NotFoundError


def resolve_card_or_exit(ctx: click.Context, card_service: CardService, card: str) -> Card:
    """Resolve an active card by ID or alias, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return card_service.resolve_card(card)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
