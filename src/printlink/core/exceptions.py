"""PrintLink exception hierarchy."""

from __future__ import annotations


class PrintLinkError(Exception):
    """Base exception for all PrintLink errors."""


class ValidationError(PrintLinkError):
    """Malformed or missing required input."""


class NotFoundError(PrintLinkError):
    """A looked-up entity does not exist."""


class MappingNotFoundError(NotFoundError):
    """No mapping stored for a product/variant."""

    def __init__(self, product_id: str, variant_id: str | None) -> None:
        self.product_id = product_id
        self.variant_id = variant_id
        super().__init__(f"No mapping for product={product_id!r}, variant={variant_id!r}")


class CatalogFileNotFoundError(NotFoundError):
    """No catalog file matches a filename after every query variant was tried."""

    def __init__(self, file_name: str, attempts: int = 0) -> None:
        self.file_name = file_name
        self.attempts = attempts
        super().__init__(f"SimplyPrint file not found: {file_name} ({attempts} searches)")


class UnmatchedItemNotFoundError(NotFoundError):
    """Unmatched line item id does not exist."""

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Unmatched item not found: {item_id}")


class UpstreamError(PrintLinkError):
    """Catalog or queue service call failed, timed out, or returned a bad shape."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(PrintLinkError):
    """Required external credentials or identifiers are missing."""


class StorageError(PrintLinkError):
    """Persistence backend operation failed."""
