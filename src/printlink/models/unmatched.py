"""Unmatched line item records kept for operator follow-up."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field


class UnmatchedReason(StrEnum):
    NO_MAPPING = "No mapping found"
    QUEUEING_FAILED = "Queueing failed"
    QUEUED_MANUALLY = "Queued manually"


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UnmatchedLineItem(BaseModel):
    """An order line that could not be fully resolved or queued."""

    id: str = Field(default_factory=_new_id)
    order_id: str
    order_name: Optional[str] = None
    product_id: str
    variant_id: Optional[str] = None
    sku: Optional[str] = None
    quantity: int = 1
    reason: str
    queued_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_queued(self) -> bool:
        return self.queued_at is not None
