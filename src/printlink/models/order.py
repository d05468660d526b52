"""Inbound order records built from Shopify ``orders/create`` webhooks."""

from __future__ import annotations

from typing import Any, Optional

import pydantic
from pydantic import BaseModel, Field, field_validator

from printlink.core.exceptions import ValidationError


def _opt_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


class LineItem(BaseModel):
    """One order line. ``product_id`` may be empty for custom/removed products."""

    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    sku: Optional[str] = None
    quantity: int = 1

    @field_validator("product_id", "variant_id", "sku", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Optional[str]:
        return _opt_str(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _default_quantity(cls, value: Any) -> Any:
        return 1 if value is None else value


class OrderPayload(BaseModel):
    order_id: Optional[str] = None
    order_name: Optional[str] = None
    line_items: list[LineItem] = Field(default_factory=list)

    @field_validator("order_id", "order_name", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Optional[str]:
        return _opt_str(value)

    @classmethod
    def from_webhook(cls, payload: Any) -> OrderPayload:
        """Build an order from a raw Shopify webhook body.

        Raises ValidationError when the body is not an object or a field has
        the wrong shape. A missing ``line_items`` array yields an empty order.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Order payload must be a JSON object")

        raw_items = payload.get("line_items")
        if not isinstance(raw_items, list):
            raw_items = []

        try:
            return cls(
                order_id=payload.get("id"),
                order_name=payload.get("name"),
                line_items=[
                    {
                        "product_id": item.get("product_id"),
                        "variant_id": item.get("variant_id"),
                        "sku": item.get("sku"),
                        "quantity": item.get("quantity"),
                    }
                    for item in raw_items
                    if isinstance(item, dict)
                ],
            )
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Invalid order payload: {exc}") from exc
