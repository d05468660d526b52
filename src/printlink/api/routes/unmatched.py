"""Operator actions on unmatched line items."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from printlink.api.dependencies import get_services
from printlink.api.schemas import QueueUnmatchedRequest
from printlink.services import Services

router = APIRouter(tags=["unmatched"])


@router.get("")
def list_unmatched(services: Services = Depends(get_services)) -> dict:
    return {"items": [i.model_dump(mode="json") for i in services.unmatched.list_items()]}


@router.post("/{item_id}/queue")
def queue_unmatched(item_id: str, body: QueueUnmatchedRequest,
                    services: Services = Depends(get_services)) -> dict:
    item = services.unmatched.resolve_manually(item_id, body.file_name,
                                               persist_mapping=body.save_mapping)
    return {"status": "queued", "item": item.model_dump(mode="json")}


@router.delete("/{item_id}")
def dismiss_unmatched(item_id: str, services: Services = Depends(get_services)) -> dict:
    services.unmatched.dismiss(item_id)
    return {"status": "deleted"}
