"""Line item lifecycle and per-order resolution results."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field


class LineItemStatus(StrEnum):
    UNPROCESSED = "UNPROCESSED"
    QUEUED = "QUEUED"
    SKIPPED = "SKIPPED"
    UNMATCHED = "UNMATCHED"
    MANUALLY_QUEUED = "MANUALLY_QUEUED"
    DISMISSED = "DISMISSED"


TRANSITIONS: dict[LineItemStatus, frozenset[LineItemStatus]] = {
    LineItemStatus.UNPROCESSED: frozenset(
        {LineItemStatus.QUEUED, LineItemStatus.SKIPPED, LineItemStatus.UNMATCHED}
    ),
    LineItemStatus.UNMATCHED: frozenset(
        {LineItemStatus.MANUALLY_QUEUED, LineItemStatus.DISMISSED}
    ),
    LineItemStatus.QUEUED: frozenset(),
    LineItemStatus.SKIPPED: frozenset(),
    LineItemStatus.MANUALLY_QUEUED: frozenset(),
    LineItemStatus.DISMISSED: frozenset(),
}


def can_transition(current: LineItemStatus, target: LineItemStatus) -> bool:
    return target in TRANSITIONS[current]


class FileOutcome(BaseModel):
    """Result of queueing a single file for a line item."""

    file_name: str
    queued: bool
    file_id: Optional[str] = None
    error: str = ""


class LineItemOutcome(BaseModel):
    """What the pipeline did with one line item."""

    index: int
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    quantity: int = 1
    status: LineItemStatus = LineItemStatus.UNPROCESSED
    files: list[FileOutcome] = Field(default_factory=list)
    unmatched_ids: list[str] = Field(default_factory=list)
    detail: str = ""


class OrderResult(BaseModel):
    """Aggregated outcome of one order; never surfaced as a failure to the caller."""

    order_id: Optional[str] = None
    order_name: Optional[str] = None
    items: list[LineItemOutcome] = Field(default_factory=list)

    @property
    def queued_count(self) -> int:
        return sum(1 for item in self.items for f in item.files if f.queued)

    @property
    def unmatched_count(self) -> int:
        return sum(len(item.unmatched_ids) for item in self.items)


class FileCheck(BaseModel):
    """Dry-run or live validation result for one filename."""

    file_name: str
    resolvable: bool
    file_id: Optional[str] = None
    queued: bool = False
    error: str = ""
