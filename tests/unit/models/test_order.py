"""Tests for webhook payload parsing."""

from __future__ import annotations

import pytest

from printlink.core.exceptions import ValidationError
from printlink.models.order import OrderPayload


class TestFromWebhook:
    def test_maps_shopify_fields(self):
        order = OrderPayload.from_webhook({
            "id": 5551234,
            "name": "#1001",
            "line_items": [
                {"product_id": 111, "variant_id": 222, "sku": "W-1", "quantity": 3, "title": "Widget"},
            ],
        })

        assert order.order_id == "5551234"
        assert order.order_name == "#1001"
        item = order.line_items[0]
        assert (item.product_id, item.variant_id, item.sku, item.quantity) == ("111", "222", "W-1", 3)

    def test_missing_values_normalized(self):
        order = OrderPayload.from_webhook({"line_items": [{"product_id": None, "sku": ""}]})

        assert order.order_id is None
        item = order.line_items[0]
        assert item.product_id is None
        assert item.variant_id is None
        assert item.sku is None
        assert item.quantity == 1

    def test_missing_line_items_is_empty_order(self):
        assert OrderPayload.from_webhook({"id": 1}).line_items == []

    def test_non_list_line_items_is_empty_order(self):
        assert OrderPayload.from_webhook({"id": 1, "line_items": "oops"}).line_items == []

    @pytest.mark.parametrize("payload", [None, [], "order", 3])
    def test_non_object_rejected(self, payload):
        with pytest.raises(ValidationError):
            OrderPayload.from_webhook(payload)

    def test_bad_quantity_rejected(self):
        with pytest.raises(ValidationError):
            OrderPayload.from_webhook({"line_items": [{"product_id": 1, "quantity": "many"}]})
