"""Tests for card management."""

import pytest

from monthbook.domain.entities import RecordStatus
from monthbook.domain.errors import NotFoundError, ValidationError


def test_create_card(card_service):
    card = card_service.create_card(alias="  Nubank ", due_day_of_month=15)
    assert card.alias == "Nubank"
    assert card.due_day_of_month == 15
    assert card.status == RecordStatus.ACTIVE
    assert card_service.get_card(card.id) == card


@pytest.mark.parametrize("day", [0, 32, -1, True, "10"])
def test_create_card_rejects_invalid_due_day(card_service, day):
    with pytest.raises(ValidationError):
        card_service.create_card(alias="Visa", due_day_of_month=day)
    assert card_service.list_cards() == []


def test_create_card_requires_alias(card_service):
    with pytest.raises(ValidationError):
        card_service.create_card(alias="   ", due_day_of_month=10)


def test_list_cards_sorted_and_filtered(card_service):
    card_service.create_card(alias="visa", due_day_of_month=10)
    master = card_service.create_card(alias="Master", due_day_of_month=5)
    card_service.create_card(alias="Amex", due_day_of_month=1)
    card_service.delete_card(master.id)

    assert [card.alias for card in card_service.list_cards()] == ["Amex", "visa"]
    assert [card.alias for card in card_service.list_cards(include_inactive=True)] == ["Amex", "Master", "visa"]


def test_resolve_card_by_id_or_alias(card_service, sample_card):
    assert card_service.resolve_card(sample_card.id) == sample_card
    assert card_service.resolve_card("test card") == sample_card
    with pytest.raises(NotFoundError):
        card_service.resolve_card("Unknown")


def test_deleted_card_cannot_be_resolved(card_service, sample_card):
    card_service.delete_card(sample_card.id)
    with pytest.raises(NotFoundError):
        card_service.resolve_card(sample_card.id)
    with pytest.raises(NotFoundError):
        card_service.get_active_card(sample_card.id)
    assert card_service.get_card(sample_card.id).deleted_at is not None


def test_update_card(card_service, sample_card):
    updated = card_service.update_card(sample_card.id, alias="Renamed", due_day_of_month=20)
    assert updated.id == sample_card.id
    assert updated.created_at == sample_card.created_at
    assert card_service.get_card(sample_card.id).alias == "Renamed"
    assert len(card_service.list_cards()) == 1


def test_update_missing_card_creates_new_one(card_service):
    created = card_service.update_card("missing", alias="Visa", due_day_of_month=3)
    assert created.id != "missing"
    assert card_service.get_card(created.id).alias == "Visa"


def test_delete_missing_card(card_service):
    with pytest.raises(NotFoundError):
        card_service.delete_card("missing")
