"""Variant-first mapping lookup with product-level fallback."""

from __future__ import annotations

from printlink.core.exceptions import MappingNotFoundError
from printlink.core.protocols import IMappingStore
from printlink.models.mapping import Mapping


class MappingResolver:
    def __init__(self, store: IMappingStore) -> None:
        self._store = store

    def resolve(self, product_id: str, variant_id: str | None = None) -> Mapping | None:
        """Exact (product, variant) first, then the (product, None) fallback."""
        if variant_id:
            mapping = self._store.get(product_id, variant_id)
            if mapping is not None:
                return mapping
        return self._store.get(product_id, None)

    def require(self, product_id: str, variant_id: str | None = None) -> Mapping:
        mapping = self.resolve(product_id, variant_id)
        if mapping is None:
            raise MappingNotFoundError(product_id, variant_id)
        return mapping
