"""Tests for identity and item validation."""

import logging

import pytest

from kepixel.core.validation import (
    validate_identity,
    validate_item,
    validate_items,
    warn_if_invalid_identity,
    warn_if_invalid_items,
)
from kepixel.schemas.item import Item
from kepixel.schemas.user_data import UserData

FULL_ITEM = {"id": "sku-1", "name": "Shirt", "price": 10, "quantity": 1}


class TestValidateIdentity:
    @pytest.mark.parametrize(
        "fragment",
        [
            {"email": "u@x.com"},
            {"phone": "+15550100"},
            {"name": "Ada"},
            {"id": 42},
            UserData(email="u@x.com"),
            {"email": "", "id": "u-1"},
            {"id": 0},
            UserData(phone=5551234),
        ],
    )
    def test_valid_fragments(self, fragment):
        assert validate_identity(fragment)

    @pytest.mark.parametrize(
        "fragment",
        [
            {},
            {"email": "", "phone": None},
            {"app_version": "1.2"},
            UserData(),
            None,
            "u@x.com",
        ],
    )
    def test_invalid_fragments(self, fragment):
        assert not validate_identity(fragment)

    def test_warning_logged_for_invalid_fragment(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kepixel"):
            assert not warn_if_invalid_identity({"app_version": "1.2"})

        assert "Invalid user_data" in caplog.text


class TestValidateItems:
    def test_complete_item(self):
        assert validate_item(FULL_ITEM)
        assert validate_item(Item(**FULL_ITEM))

    def test_explicit_none_counts_as_supplied(self):
        assert validate_item({**FULL_ITEM, "price": None})

    def test_missing_field_fails(self):
        partial = {k: v for k, v in FULL_ITEM.items() if k != "quantity"}
        assert not validate_item(partial)
        assert not validate_item(Item(**partial))

    def test_non_mapping_fails(self):
        assert not validate_item("sku-1")

    def test_empty_sequence_is_valid(self):
        assert validate_items([])

    def test_one_bad_item_fails_sequence(self):
        assert not validate_items([FULL_ITEM, {"id": "x"}])

    @pytest.mark.parametrize("items", [None, "abc", FULL_ITEM, 3])
    def test_non_sequence_fails(self, items):
        assert not validate_items(items)

    def test_warning_logged_for_invalid_items(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kepixel"):
            assert not warn_if_invalid_items([{"id": "x"}])

        assert "Invalid items array" in caplog.text
