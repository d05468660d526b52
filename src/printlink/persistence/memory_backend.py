"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

from printlink.core.exceptions import UpstreamError
from printlink.models.catalog import CatalogFile, QueueGroup
from printlink.models.mapping import Mapping
from printlink.models.unmatched import UnmatchedLineItem


class MemoryMappingStore:
    """Dict-backed IMappingStore for unit tests."""

    def __init__(self) -> None:
        self._mappings: dict[tuple[str, str | None], Mapping] = {}

    def get(self, product_id: str, variant_id: str | None) -> Mapping | None:
        return self._mappings.get((product_id, variant_id))

    def upsert(self, mapping: Mapping) -> Mapping:
        self._mappings[mapping.key] = mapping
        return mapping

    def delete(self, product_id: str, variant_id: str | None) -> None:
        self._mappings.pop((product_id, variant_id), None)

    def list_all(self) -> list[Mapping]:
        return list(self._mappings.values())


class MemoryUnmatchedStore:
    """Dict-backed IUnmatchedStore for unit tests."""

    def __init__(self) -> None:
        self._items: dict[str, UnmatchedLineItem] = {}

    def create(self, item: UnmatchedLineItem) -> UnmatchedLineItem:
        self._items[item.id] = item
        return item

    def get(self, item_id: str) -> UnmatchedLineItem | None:
        return self._items.get(item_id)

    def list_all(self) -> list[UnmatchedLineItem]:
        return list(self._items.values())

    def update(self, item: UnmatchedLineItem) -> UnmatchedLineItem:
        self._items[item.id] = item
        return item

    def delete(self, item_id: str) -> None:
        self._items.pop(item_id, None)


class MemorySettingsStore:
    """Dict-backed ISettingsStore for unit tests."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class MemoryCatalog:
    """Canned ICatalog that records every search query and group listing."""

    def __init__(self, files: list[CatalogFile] | None = None,
                 groups: list[QueueGroup] | None = None) -> None:
        self.files: list[CatalogFile] = list(files or [])
        self.groups: list[QueueGroup] = list(groups or [])
        self.searches: list[str] = []
        self.group_calls = 0
        self._responses: dict[str, list[CatalogFile]] = {}
        self._failing: set[str] = set()

    def set_response(self, query: str, files: list[CatalogFile]) -> None:
        """Return exactly ``files`` for ``query`` instead of substring search."""
        self._responses[query] = files

    def fail_on(self, query: str) -> None:
        self._failing.add(query)

    def search(self, query: str) -> list[CatalogFile]:
        self.searches.append(query)
        if query in self._failing:
            raise UpstreamError(f"search failed for {query!r}")
        if query in self._responses:
            return self._responses[query]
        needle = query.lower()
        return [f for f in self.files if needle in f.full_name.lower()]

    def list_groups(self) -> list[QueueGroup]:
        self.group_calls += 1
        return list(self.groups)


class MemoryPrintQueue:
    """IPrintQueue that records submissions; file ids in ``failing`` raise."""

    def __init__(self) -> None:
        self.items: list[tuple[str, int, int]] = []
        self.failing: set[str] = set()

    def add_item(self, file_id: str, quantity: int, group_id: int) -> None:
        if file_id in self.failing:
            raise UpstreamError(f"queue rejected {file_id}")
        self.items.append((file_id, quantity, group_id))
