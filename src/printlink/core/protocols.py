"""Protocol interfaces for all PrintLink collaborators.

The resolution core talks to persistence, the file catalog and the print
queue only through these Protocols; production backends and the in-memory
fakes both satisfy them structurally.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from printlink.models.catalog import CatalogFile, QueueGroup
    from printlink.models.mapping import Mapping
    from printlink.models.unmatched import UnmatchedLineItem


# ---------------------------------------------------------------------------
# Persistence: Mappings
# ---------------------------------------------------------------------------

@runtime_checkable
class IMappingStore(Protocol):
    """Product/variant → file-list associations."""

    def get(self, product_id: str, variant_id: str | None) -> Mapping | None: ...

    def upsert(self, mapping: Mapping) -> Mapping: ...

    def delete(self, product_id: str, variant_id: str | None) -> None: ...

    def list_all(self) -> list[Mapping]: ...


# ---------------------------------------------------------------------------
# Persistence: Unmatched line items
# ---------------------------------------------------------------------------

@runtime_checkable
class IUnmatchedStore(Protocol):
    """Durable failure records for line items that could not be queued."""

    def create(self, item: UnmatchedLineItem) -> UnmatchedLineItem: ...

    def get(self, item_id: str) -> UnmatchedLineItem | None: ...

    def list_all(self) -> list[UnmatchedLineItem]: ...

    def update(self, item: UnmatchedLineItem) -> UnmatchedLineItem: ...

    def delete(self, item_id: str) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: Settings
# ---------------------------------------------------------------------------

@runtime_checkable
class ISettingsStore(Protocol):
    """Named string settings (queue-group override, cached credentials)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# File catalog
# ---------------------------------------------------------------------------

@runtime_checkable
class ICatalog(Protocol):
    """Searchable catalog of print files and queue groups."""

    def search(self, query: str) -> list[CatalogFile]: ...

    def list_groups(self) -> list[QueueGroup]: ...


# ---------------------------------------------------------------------------
# Print queue
# ---------------------------------------------------------------------------

@runtime_checkable
class IPrintQueue(Protocol):
    """Queue submission. Raises UpstreamError on failure."""

    def add_item(self, file_id: str, quantity: int, group_id: int) -> None: ...
