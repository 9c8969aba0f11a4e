"""Typed record collections over the key-value store."""

import json
import logging
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Callable, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from monthbook.domain.entities import Card, Expense, Income
from monthbook.storage.base import KeyValueStore
from monthbook.storage.mappers import (
    card_from_dict,
    card_to_dict,
    expense_from_dict,
    expense_to_dict,
    income_from_dict,
    income_to_dict,
    parse_datetime,
)

logger = logging.getLogger(__name__)


class Collection(str, Enum):
    """Stored collections and their keys."""

    INCOMES = "incomes"
    EXPENSES = "expenses"
    CARDS = "cards"


LAST_UPDATE_KEY = "LAST_UPDATE"

_CODECS: dict[Collection, tuple[Callable[[dict[str, Any]], Any], Callable[[Any], dict[str, Any]]]] = {
    Collection.INCOMES: (income_from_dict, income_to_dict),
    Collection.EXPENSES: (expense_from_dict, expense_to_dict),
    Collection.CARDS: (card_from_dict, card_to_dict),
}


class RecordStore:
    """Load and save whole collections of records.

    There is no querying or indexing: callers load a full collection and
    filter in memory. Saves overwrite the whole collection, last writer wins.
    """

    def __init__(self, kv_store: KeyValueStore):
        """Initialize record store.

        Args:
            kv_store: Key-value backend holding one JSON document per collection
        """
        self.kv_store = kv_store

    def load(self, collection: Collection) -> list[Any]:
        """Load every record of a collection.

        Missing keys and unparsable documents yield an empty list; malformed
        records are skipped. Problems are logged, never raised.
        """
        raw = self.kv_store.get(collection.value)
        if raw is None:
            return []

        try:
            documents = json.loads(raw)
        except ValueError as e:
            logger.warning("Stored collection %r is not valid JSON, treating as empty: %s", collection.value, e)
            return []

        if not isinstance(documents, list):
            logger.warning(
                "Stored collection %r is a %s, not a list; treating as empty",
                collection.value,
                type(documents).__name__,
            )
            return []

        from_dict = _CODECS[collection][0]
        records = []
        for index, document in enumerate(documents):
            try:
                records.append(from_dict(document))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed record %d in %r: %s", index, collection.value, e)
        return records

    def save_all(self, collection: Collection, records: Sequence[Any]) -> None:
        """Overwrite a collection with the given records."""
        to_dict = _CODECS[collection][1]
        payload = json.dumps([to_dict(record) for record in records], ensure_ascii=False)
        self.kv_store.set(collection.value, payload)
        logger.debug("Saved %d records to %r", len(records), collection.value)

    def append(self, collection: Collection, record: Any) -> None:
        """Append one record to a collection."""
        records = self.load(collection)
        records.append(record)
        self.save_all(collection, records)

    def wipe(self, collection: Collection) -> None:
        """Permanently remove a collection's key, bypassing soft delete."""
        self.kv_store.remove(collection.value)
        logger.info("Wiped collection %r", collection.value)

    def touch_last_update(self, now: Optional[datetime] = None) -> None:
        """Record the advisory last-update marker."""
        stamp = now if now is not None else datetime.now(UTC)
        self.kv_store.set(LAST_UPDATE_KEY, stamp.isoformat())

    def last_update(self) -> Optional[datetime]:
        """Return the last-update marker, or None if absent or unreadable."""
        raw = self.kv_store.get(LAST_UPDATE_KEY)
        try:
            return parse_datetime(raw)
        except (ValueError, OverflowError):
            logger.warning("Ignoring unreadable %s marker %r", LAST_UPDATE_KEY, raw)
            return None

    def load_incomes(self) -> list[Income]:
        return self.load(Collection.INCOMES)

    def load_expenses(self) -> list[Expense]:
        return self.load(Collection.EXPENSES)

    def load_cards(self) -> list[Card]:
        return self.load(Collection.CARDS)
