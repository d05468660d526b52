"""Filename → SimplyPrint file id resolution with fallback search phrasings."""

from __future__ import annotations

import os
from typing import Iterator

import structlog

from printlink.core.exceptions import CatalogFileNotFoundError, ValidationError
from printlink.core.protocols import ICatalog
from printlink.matching.normalizer import normalize
from printlink.models.catalog import CatalogFile

logger = structlog.get_logger(__name__)

MIN_TOKEN_LENGTH = 3


def strip_extension(file_name: str) -> str:
    base, _ = os.path.splitext(file_name)
    return base or file_name


def query_variants(file_name: str) -> Iterator[str]:
    """Yield distinct search phrasings, most specific first.

    Literal trimmed name, then the name without its extension, then every
    normalized token of at least three characters from the base name.
    """
    seen: set[str] = set()

    def fresh(query: str) -> bool:
        if not query or query in seen:
            return False
        seen.add(query)
        return True

    literal = file_name.strip()
    if fresh(literal):
        yield literal

    base = strip_extension(literal).strip()
    if fresh(base):
        yield base

    for token in normalize(base).split(" "):
        if len(token) >= MIN_TOKEN_LENGTH and fresh(token):
            yield token


def matches_target(file: CatalogFile, target: str) -> bool:
    """True when the file's full or bare name normalizes to ``target``."""
    return normalize(file.full_name) == target or normalize(file.name) == target


class FileIdResolver:
    """Resolves human-entered filenames to catalog ids.

    Catalog search indexes names unpredictably, so one phrasing is not
    enough; variants are searched lazily and the first exact normalized
    match wins.
    """

    def __init__(self, catalog: ICatalog) -> None:
        self._catalog = catalog

    def find(self, file_name: str) -> CatalogFile:
        if not file_name or not file_name.strip():
            raise ValidationError("File name is required")

        target = normalize(file_name)
        attempts = 0
        for query in query_variants(file_name):
            attempts += 1
            match = next(
                (f for f in self._catalog.search(query) if matches_target(f, target)),
                None,
            )
            if match is not None:
                logger.debug("file_resolved", file_name=file_name, query=query,
                             file_id=match.id, attempts=attempts)
                return match

        logger.info("file_not_found", file_name=file_name, attempts=attempts)
        raise CatalogFileNotFoundError(file_name, attempts)

    def resolve_file_id(self, file_name: str) -> str:
        return self.find(file_name).id
