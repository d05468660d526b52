"""Per-order line item resolution: mapping → files → queue, failures recorded."""

from __future__ import annotations

import structlog

from printlink.core.exceptions import PrintLinkError
from printlink.models.order import LineItem, OrderPayload
from printlink.models.pipeline import FileOutcome, LineItemOutcome, LineItemStatus, OrderResult
from printlink.models.unmatched import UnmatchedReason
from printlink.resolution.mapping_resolver import MappingResolver
from printlink.resolution.print_queue import PrintQueueService
from printlink.resolution.unmatched import UnmatchedRecorder

logger = structlog.get_logger(__name__)


class LineItemPipeline:
    """Processes one order's line items strictly in order.

    Every failure is isolated to its file and kept as an unmatched record;
    ``process_order`` itself never raises for resolution problems.
    """

    def __init__(self, mappings: MappingResolver, print_queue: PrintQueueService,
                 recorder: UnmatchedRecorder) -> None:
        self._mappings = mappings
        self._print_queue = print_queue
        self._recorder = recorder

    def process_order(self, order: OrderPayload) -> OrderResult:
        log = logger.bind(order_id=order.order_id, order_name=order.order_name)
        log.info("order_received", line_items=len(order.line_items))

        result = OrderResult(order_id=order.order_id, order_name=order.order_name)
        for index, item in enumerate(order.line_items):
            result.items.append(self._process_item(order, index, item, log))

        log.info("order_processed", queued=result.queued_count,
                 unmatched=result.unmatched_count)
        return result

    def _process_item(self, order: OrderPayload, index: int, item: LineItem,
                      log: structlog.stdlib.BoundLogger) -> LineItemOutcome:
        outcome = LineItemOutcome(index=index, product_id=item.product_id,
                                  variant_id=item.variant_id, quantity=item.quantity)
        log = log.bind(product_id=item.product_id, variant_id=item.variant_id)

        if not item.product_id:
            log.info("line_item_skipped", reason="missing product_id", index=index)
            outcome.status = LineItemStatus.SKIPPED
            outcome.detail = "missing product_id"
            return outcome

        try:
            mapping = self._mappings.resolve(item.product_id, item.variant_id)
        except PrintLinkError as exc:
            log.error("mapping_lookup_failed", error=str(exc))
            outcome.detail = str(exc)
            return outcome

        if mapping is None:
            log.info("mapping_not_found", sku=item.sku)
            outcome.status = LineItemStatus.UNMATCHED
            self._record(order, item, outcome, UnmatchedReason.NO_MAPPING, log)
            return outcome

        if mapping.skip_queue:
            log.info("line_item_skipped", reason="skip_queue")
            outcome.status = LineItemStatus.SKIPPED
            outcome.detail = "skip_queue"
            return outcome

        files = mapping.effective_files()
        if not files:
            log.warning("line_item_skipped", reason="mapping has no files")
            outcome.status = LineItemStatus.SKIPPED
            outcome.detail = "mapping has no files"
            return outcome

        for file_name in files:
            log.info("queueing_file", file=file_name, quantity=item.quantity)
            try:
                file_id = self._print_queue.enqueue(file_name, item.quantity)
            except PrintLinkError as exc:
                log.warning("file_queue_failed", file=file_name, error=str(exc))
                outcome.files.append(FileOutcome(file_name=file_name, queued=False,
                                                 error=str(exc)))
                self._record(order, item, outcome, UnmatchedReason.QUEUEING_FAILED, log)
                continue
            outcome.files.append(FileOutcome(file_name=file_name, queued=True,
                                             file_id=file_id))

        failed = any(not f.queued for f in outcome.files)
        outcome.status = LineItemStatus.UNMATCHED if failed else LineItemStatus.QUEUED
        return outcome

    def _record(self, order: OrderPayload, item: LineItem, outcome: LineItemOutcome,
                reason: UnmatchedReason, log: structlog.stdlib.BoundLogger) -> None:
        if not order.order_id:
            log.warning("unmatched_not_recorded", reason=reason.value,
                        detail="order has no id")
            return
        try:
            record = self._recorder.record(
                order_id=order.order_id,
                order_name=order.order_name,
                product_id=item.product_id or "",
                variant_id=item.variant_id,
                sku=item.sku,
                quantity=item.quantity,
                reason=reason.value,
            )
        except PrintLinkError as exc:
            log.error("unmatched_record_failed", reason=reason.value, error=str(exc))
            return
        outcome.unmatched_ids.append(record.id)
