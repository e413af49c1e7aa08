"""
Unit tests for cosmosbench.models module.
Tests Document deserialization from service items.
"""

import base64

import pytest

from cosmosbench.errors import DeserializationError
from cosmosbench.models import Document


class TestDocument:
    """Test the Document model."""

    def test_from_service_item(self, item_factory):
        """Test that a full service item maps onto the Document shape."""
        document = Document.from_item(item_factory("bar"))

        assert document.id == "bar"
        assert document.value == b"value"
        assert document.store_id == "cosmos/default"
        assert document.rid == "rid-bar"
        assert document.self_link == "dbs/db/colls/c/docs/bar/"
        assert document.etag == '"00000000-0000-0000-0000-000000000000"'
        assert document.attachments == "attachments/"
        assert document.timestamp == 1700000000

    def test_base64_value(self):
        """Test that a base64 string payload is decoded."""
        encoded = base64.b64encode(b"\x00\x01payload").decode("ascii")

        document = Document.from_item({"id": "bar", "value": encoded})

        assert document.value == b"\x00\x01payload"

    def test_missing_value_and_store_id(self):
        """Test defaults for optional fields."""
        document = Document.from_item({"id": "bar"})

        assert document.value == b""
        assert document.store_id is None
        assert document.timestamp is None

    def test_unknown_fields_are_ignored(self):
        """Test that extra properties do not break deserialization."""
        document = Document.from_item({"id": "bar", "color": "blue"})

        assert document.id == "bar"

    @pytest.mark.parametrize("item", [
        {"value": [1, 2]},
        {"id": "bar", "value": "not base64!!"},
        {"id": "bar", "value": [1, 300]},
        {"id": "bar", "value": [True]},
        {"id": "bar", "value": {"nested": 1}},
        {"id": "bar", "_ts": "yesterday"},
        ["not", "an", "object"],
    ])
    def test_malformed_items(self, item):
        """Test that malformed items raise DeserializationError."""
        with pytest.raises(DeserializationError):
            Document.from_item(item)

    def test_partition_key(self):
        """Test that store_id routes the document, falling back to id."""
        assert Document(id="bar", store_id="cosmos/default").partition_key == "cosmos/default"
        assert Document(id="bar").partition_key == "bar"

    def test_to_item(self):
        """Test the body that is written to the store."""
        document = Document.from_item({"id": "key", "value": [118], "store_id": "s", "_etag": "e"})

        assert document.to_item() == {"id": "key", "value": [118], "store_id": "s"}

    def test_to_item_without_store_id(self):
        """Test that store_id is omitted when unset."""
        assert Document(id="key", value=b"v").to_item() == {"id": "key", "value": [118]}
