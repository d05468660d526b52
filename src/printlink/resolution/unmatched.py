"""Append-only recorder for unmatched line items and their operator actions."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from printlink.core.exceptions import UnmatchedItemNotFoundError, ValidationError
from printlink.core.protocols import IMappingStore, IUnmatchedStore
from printlink.models.mapping import Mapping
from printlink.models.unmatched import UnmatchedLineItem, UnmatchedReason
from printlink.resolution.print_queue import PrintQueueService

logger = structlog.get_logger(__name__)


class UnmatchedRecorder:
    def __init__(self, store: IUnmatchedStore, mappings: IMappingStore,
                 print_queue: PrintQueueService) -> None:
        self._store = store
        self._mappings = mappings
        self._print_queue = print_queue

    def record(
        self,
        *,
        order_id: str,
        product_id: str,
        reason: str,
        quantity: int = 1,
        order_name: str | None = None,
        variant_id: str | None = None,
        sku: str | None = None,
    ) -> UnmatchedLineItem:
        item = self._store.create(UnmatchedLineItem(
            order_id=order_id,
            order_name=order_name,
            product_id=product_id,
            variant_id=variant_id,
            sku=sku,
            quantity=quantity,
            reason=reason,
        ))
        logger.info("unmatched_recorded", item_id=item.id, order_id=order_id,
                    product_id=product_id, variant_id=variant_id, reason=reason)
        return item

    def list_items(self) -> list[UnmatchedLineItem]:
        """All records, newest first."""
        return sorted(self._store.list_all(), key=lambda i: i.created_at, reverse=True)

    def get(self, item_id: str) -> UnmatchedLineItem:
        item = self._store.get(item_id)
        if item is None:
            raise UnmatchedItemNotFoundError(item_id)
        return item

    def resolve_manually(self, item_id: str, file_name: str,
                         persist_mapping: bool = False) -> UnmatchedLineItem:
        """Queue ``file_name`` with the stored quantity and mark the item queued.

        With ``persist_mapping`` the product/variant is mapped to the file
        first, so future orders resolve automatically even if queueing fails.
        """
        if not file_name or not file_name.strip():
            raise ValidationError("File name is required")
        item = self.get(item_id)
        if item.is_queued:
            raise ValidationError(f"Unmatched item {item_id} was already queued")

        if persist_mapping:
            existing = self._mappings.get(item.product_id, item.variant_id)
            if existing is None:
                mapping = Mapping(product_id=item.product_id, variant_id=item.variant_id,
                                  file_names=[file_name], file_name=file_name)
            else:
                mapping = existing.model_copy(update={
                    "file_names": [file_name],
                    "file_name": file_name,
                    "updated_at": datetime.now(timezone.utc),
                })
            self._mappings.upsert(mapping)
            logger.info("mapping_saved_from_unmatched", item_id=item_id,
                        product_id=item.product_id, variant_id=item.variant_id)

        self._print_queue.enqueue(file_name, item.quantity)
        queued = item.model_copy(update={
            "queued_at": datetime.now(timezone.utc),
            "reason": UnmatchedReason.QUEUED_MANUALLY.value,
        })
        return self._store.update(queued)

    def dismiss(self, item_id: str) -> None:
        self.get(item_id)
        self._store.delete(item_id)
        logger.info("unmatched_dismissed", item_id=item_id)
