"""Shopify order webhook ingestion.

Always answers 200 so Shopify does not keep redelivering an order whose
problems will not change on retry; failures live in unmatched records.
"""

from __future__ import annotations

import json

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from printlink.api.dependencies import get_services
from printlink.core.exceptions import PrintLinkError
from printlink.models.order import OrderPayload
from printlink.services import Services

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post("/shopify/orders/create")
async def shopify_order_created(
    request: Request, services: Services = Depends(get_services),
) -> dict[str, str]:
    body = await request.body()
    try:
        order = OrderPayload.from_webhook(json.loads(body or b"null"))
    except (ValueError, PrintLinkError) as exc:
        logger.warning("webhook_rejected", error=str(exc))
        return {"status": "error"}

    try:
        await run_in_threadpool(services.pipeline.process_order, order)
    except Exception:
        logger.exception("webhook_processing_failed", order_id=order.order_id)
        return {"status": "error"}
    return {"status": "ok"}
