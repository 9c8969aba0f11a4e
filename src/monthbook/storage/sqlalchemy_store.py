"""Generic SQLAlchemy key-value store implementation."""

import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from monthbook.domain.errors import StorageError, storage_write_failed
from monthbook.storage.base import KeyValueStore
from monthbook.storage.models import KeyValueEntry, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """SQLAlchemy-based implementation of the KeyValueStore interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get(self, key: str) -> Optional[str]:
        """Get the raw value stored under key."""
        session = self._get_session()
        entry = session.get(KeyValueEntry, key)
        if entry is None:
            return None
        return entry.value

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to write key %r: %s", key, e)
            raise StorageError(storage_write_failed(key)) from e

    def remove(self, key: str) -> None:
        """Remove key if present."""
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to remove key %r: %s", key, e)
            raise StorageError(storage_write_failed(key)) from e

    def keys(self) -> list[str]:
        """List all stored keys."""
        session = self._get_session()
        return [row.key for row in session.query(KeyValueEntry).order_by(KeyValueEntry.key).all()]
