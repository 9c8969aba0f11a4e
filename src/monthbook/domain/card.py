"""Card domain service."""

import logging
from dataclasses import replace
from datetime import datetime, UTC
from typing import Optional

from monthbook.domain.entities import Card, RecordStatus
from monthbook.domain.errors import NotFoundError, record_not_found
from monthbook.domain.validation import require_due_day, require_text
from monthbook.storage.records import Collection, RecordStore
from monthbook.utils.ids import new_id

logger = logging.getLogger(__name__)


class CardService:
    """Service for managing credit cards."""

    def __init__(self, store: RecordStore):
        """Initialize card service.

        Args:
            store: Record store instance
        """
        self.store = store

    def _save(self, cards: list[Card]) -> None:
        self.store.save_all(Collection.CARDS, cards)
        self.store.touch_last_update()

    def create_card(self, alias: str, due_day_of_month: int) -> Card:
        """Create a new card.

        Args:
            alias: Card nickname
            due_day_of_month: Billing day (1-31)

        Returns:
            The stored card

        Raises:
            ValidationError: If alias is empty or the due day is out of range
        """
        alias = require_text(alias, "card alias")
        due_day_of_month = require_due_day(due_day_of_month)
        card = Card(
            id=new_id(),
            alias=alias,
            due_day_of_month=due_day_of_month,
            created_at=datetime.now(UTC),
        )
        self.store.append(Collection.CARDS, card)
        self.store.touch_last_update()
        logger.info("Created card %s (%s)", card.id, alias)
        return card

    def get_card(self, card_id: str) -> Optional[Card]:
        """Get card by ID, including inactive cards."""
        for card in self.store.load_cards():
            if card.id == card_id:
                return card
        return None

    def get_active_card(self, card_id: str) -> Card:
        """Get an active card by ID.

        Raises:
            NotFoundError: If the card doesn't exist or was deleted
        """
        card = self.get_card(card_id)
        if card is None or card.is_inactive:
            raise NotFoundError(record_not_found("card", card_id))
        return card

    def resolve_card(self, card: str) -> Card:
        """Resolve an active card by ID or alias (case-insensitive).

        Raises:
            NotFoundError: If no active card matches
        """
        active = self.list_cards()
        for candidate in active:
            if candidate.id == card:
                return candidate
        for candidate in active:
            if candidate.alias.casefold() == card.strip().casefold():
                return candidate
        raise NotFoundError(record_not_found("card", card))

    def list_cards(self, include_inactive: bool = False) -> list[Card]:
        """List cards sorted by alias.

        Args:
            include_inactive: If True, include soft-deleted cards
        """
        cards = self.store.load_cards()
        if not include_inactive:
            cards = [card for card in cards if not card.is_inactive]
        return sorted(cards, key=lambda card: card.alias.casefold())

    def update_card(self, card_id: str, alias: str, due_day_of_month: int) -> Card:
        """Update a card's alias and billing day.

        Existing credit installments keep their due dates; only purchases saved
        afterwards use the new billing day. If the card no longer exists, the
        edit is stored as a new card.

        Raises:
            ValidationError: If alias is empty or the due day is out of range
        """
        alias = require_text(alias, "card alias")
        due_day_of_month = require_due_day(due_day_of_month)
        cards = self.store.load_cards()
        for index, existing in enumerate(cards):
            if existing.id == card_id:
                updated = replace(existing, alias=alias, due_day_of_month=due_day_of_month)
                cards[index] = updated
                self._save(cards)
                logger.info("Updated card %s", card_id)
                return updated

        logger.warning("Card %s not found for update, adding it as a new card", card_id)
        created = Card(
            id=new_id(),
            alias=alias,
            due_day_of_month=due_day_of_month,
            created_at=datetime.now(UTC),
        )
        cards.append(created)
        self._save(cards)
        return created

    def delete_card(self, card_id: str) -> Card:
        """Soft-delete a card so it can no longer be selected.

        Raises:
            NotFoundError: If the card doesn't exist
        """
        cards = self.store.load_cards()
        for index, existing in enumerate(cards):
            if existing.id == card_id:
                deleted = replace(existing, status=RecordStatus.INACTIVE, deleted_at=datetime.now(UTC))
                cards[index] = deleted
                self._save(cards)
                logger.info("Soft-deleted card %s", card_id)
                return deleted
        raise NotFoundError(record_not_found("card", card_id))
