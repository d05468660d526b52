"""Product/variant → print file mapping model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from printlink.matching.normalizer import normalize


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Mapping(BaseModel):
    """Stored association from a Shopify product/variant to SimplyPrint files.

    ``variant_id=None`` marks the product-level fallback. ``file_name`` is the
    legacy single-file field kept alongside the structured ``file_names`` list.
    """

    product_id: str
    variant_id: Optional[str] = None
    file_names: list[str] = Field(default_factory=list)
    file_name: Optional[str] = None
    skip_queue: bool = False
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def key(self) -> tuple[str, str | None]:
        return self.product_id, self.variant_id

    def effective_files(self) -> list[str]:
        """Structured list plus legacy field, deduplicated by normalized name.

        First occurrence wins and keeps its original spelling; blank names
        are dropped.
        """
        candidates = [*self.file_names]
        if self.file_name:
            candidates.append(self.file_name)

        seen: set[str] = set()
        files: list[str] = []
        for name in candidates:
            if not name or not name.strip():
                continue
            key = normalize(name)
            if key in seen:
                continue
            seen.add(key)
            files.append(name)
        return files
