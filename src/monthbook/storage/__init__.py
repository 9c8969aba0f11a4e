"""Storage layer for monthbook application."""

from monthbook.storage.base import KeyValueStore
from monthbook.storage.factories import create_sqlite_store
from monthbook.storage.records import Collection, RecordStore

__all__ = ["KeyValueStore", "create_sqlite_store", "Collection", "RecordStore"]
