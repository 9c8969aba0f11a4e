"""Store factory functions for creating key-value store instances."""

import os
from pathlib import Path
from typing import Optional

from monthbook.storage.sqlalchemy_store import SQLAlchemyKeyValueStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyKeyValueStore:
    """Create a SQLite-backed key-value store.

    Args:
        database_path: Path to SQLite database file. If None, checks MONTHBOOK_DB_PATH
            environment variable, then defaults to ~/.monthbook/monthbook.db

    Returns:
        SQLAlchemyKeyValueStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("MONTHBOOK_DB_PATH")

    if database_path is None:
        home = Path.home()
        db_dir = home / ".monthbook"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "monthbook.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyKeyValueStore(database_url)
