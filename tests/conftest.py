"""Shared pytest fixtures for monthbook tests."""

import tempfile
import os
import pytest

from monthbook.storage.factories import create_sqlite_store
from monthbook.storage.records import RecordStore
from monthbook.domain.card import CardService
from monthbook.domain.expense import ExpenseService
from monthbook.domain.income import IncomeService
from monthbook.domain.ledger import LedgerService
from monthbook.domain.summary import SummaryService


@pytest.fixture
def temp_store():
    """Create a temporary SQLite key-value store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    kv_store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    kv_store.database_path = db_path
    kv_store.connect()
    kv_store.initialize_schema()

    yield kv_store

    kv_store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def record_store(temp_store):
    """Create a RecordStore over the temporary store."""
    return RecordStore(temp_store)


@pytest.fixture
def income_service(record_store):
    return IncomeService(record_store)


@pytest.fixture
def expense_service(record_store):
    return ExpenseService(record_store)


@pytest.fixture
def card_service(record_store):
    return CardService(record_store)


@pytest.fixture
def ledger_service(record_store):
    return LedgerService(record_store)


@pytest.fixture
def summary_service(record_store):
    return SummaryService(record_store)


@pytest.fixture
def sample_card(card_service):
    """Create a card billed on the 10th."""
    return card_service.create_card(alias="Test Card", due_day_of_month=10)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
