"""Queue-group override setting."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from printlink.api.dependencies import get_services
from printlink.api.schemas import QueueGroupSetting
from printlink.services import Services

router = APIRouter(tags=["settings"])


@router.get("/queue-group")
def get_queue_group(services: Services = Depends(get_services)) -> dict:
    return {"groupId": services.queue_groups.get_override()}


@router.post("/queue-group")
def set_queue_group(body: QueueGroupSetting, services: Services = Depends(get_services)) -> dict:
    return {"groupId": services.queue_groups.set_override(body.group_id)}
