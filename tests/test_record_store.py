"""Tests for the record store over the key-value backend."""

import json
from datetime import date, datetime, UTC

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from monthbook.cli.main import cli
from monthbook.domain.errors import StorageError
from monthbook.domain.entities import Card, DebitExpense
from monthbook.storage.records import LAST_UPDATE_KEY, Collection


def _card(card_id="1", alias="Visa"):
    return Card(id=card_id, alias=alias, due_day_of_month=10, created_at=datetime(2024, 1, 1, tzinfo=UTC))


def test_missing_collection_is_empty(record_store):
    assert record_store.load_incomes() == []
    assert record_store.load_expenses() == []
    assert record_store.load_cards() == []


def test_save_and_load(record_store):
    record_store.save_all(Collection.CARDS, [_card("1", "Visa"), _card("2", "Master")])
    cards = record_store.load_cards()
    assert [card.alias for card in cards] == ["Visa", "Master"]
    assert cards[0] == _card("1", "Visa")


def test_append(record_store):
    record_store.append(Collection.CARDS, _card("1"))
    record_store.append(Collection.CARDS, _card("2"))
    assert [card.id for card in record_store.load_cards()] == ["1", "2"]


def test_invalid_json_is_empty(temp_store, record_store):
    temp_store.set(Collection.EXPENSES.value, "{not json")
    assert record_store.load_expenses() == []


def test_non_list_document_is_empty(temp_store, record_store):
    temp_store.set(Collection.INCOMES.value, json.dumps({"id": "1"}))
    assert record_store.load_incomes() == []


def test_malformed_records_skipped(temp_store, record_store):
    documents = [
        {"id": "1", "alias": "Visa", "dueDayOfMonth": 10, "createdAt": "2024-01-01T00:00:00Z"},
        {"id": "2", "alias": "Broken"},
        "not a record",
    ]
    temp_store.set(Collection.CARDS.value, json.dumps(documents))
    cards = record_store.load_cards()
    assert [card.id for card in cards] == ["1"]


def test_unicode_round_trip(temp_store, record_store):
    expense = DebitExpense(
        id="1",
        description="Padaria São João",
        value=12.5,
        purchase_date=date(2024, 2, 3),
        created_at=datetime(2024, 2, 3, tzinfo=UTC),
    )
    record_store.save_all(Collection.EXPENSES, [expense])
    assert "São João" in temp_store.get(Collection.EXPENSES.value)
    assert record_store.load_expenses() == [expense]


def test_wipe_removes_key(temp_store, record_store):
    record_store.save_all(Collection.CARDS, [_card()])
    record_store.wipe(Collection.CARDS)
    assert temp_store.get(Collection.CARDS.value) is None
    assert record_store.load_cards() == []


def test_last_update_marker(temp_store, record_store):
    assert record_store.last_update() is None
    stamp = datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC)
    record_store.touch_last_update(stamp)
    assert record_store.last_update() == stamp
    assert LAST_UPDATE_KEY in temp_store.keys()


def test_unreadable_last_update_ignored(temp_store, record_store):
    temp_store.set(LAST_UPDATE_KEY, "yesterday-ish")
    assert record_store.last_update() is None


def _failing_commit(self):
    raise SQLAlchemyError("database is locked")


@pytest.fixture
def failing_commit(monkeypatch):
    """Make every session commit fail as a locked database would."""
    monkeypatch.setattr(Session, "commit", _failing_commit)


def test_failed_write_raises_storage_error(temp_store, record_store, monkeypatch):
    record_store.save_all(Collection.CARDS, [_card("1", "Visa")])
    monkeypatch.setattr(Session, "commit", _failing_commit)

    with pytest.raises(StorageError, match="Please try again"):
        record_store.save_all(Collection.CARDS, [_card("2", "Master")])

    monkeypatch.undo()
    assert [card.id for card in record_store.load_cards()] == ["1"]


def test_failed_remove_keeps_value(temp_store, record_store, monkeypatch):
    record_store.save_all(Collection.CARDS, [_card("1", "Visa")])
    monkeypatch.setattr(Session, "commit", _failing_commit)

    with pytest.raises(StorageError, match="Please try again"):
        record_store.wipe(Collection.CARDS)

    monkeypatch.undo()
    assert [card.id for card in record_store.load_cards()] == ["1"]


def test_cli_reports_failed_write(cli_runner, temp_store, failing_commit):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "card", "add", "Visa", "--due-day", "5"])
    assert result.exit_code == 1
    assert "Error: Could not save 'cards'. Please try again." in result.output
