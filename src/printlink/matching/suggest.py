"""Ranked file suggestions for free-text operator queries."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import structlog

from printlink.core.protocols import ICatalog
from printlink.matching.normalizer import normalize
from printlink.matching.scorer import rank_candidates, score_match
from printlink.models.catalog import CatalogFile, FileCandidate

logger = structlog.get_logger(__name__)

DEFAULT_FAN_OUT = 4
DEFAULT_LIMIT = 8


def search_tokens(normalized_query: str, fan_out: int = DEFAULT_FAN_OUT) -> list[str]:
    """Distinct tokens longer than two characters, capped at ``fan_out``."""
    tokens = [t for t in normalized_query.split(" ") if len(t) > 2][:fan_out]
    return list(dict.fromkeys(tokens))


def merge_unique(result_sets: list[list[CatalogFile]]) -> list[CatalogFile]:
    """Flatten search results, keeping the first file seen per id."""
    seen: set[str] = set()
    merged: list[CatalogFile] = []
    for files in result_sets:
        for file in files:
            key = file.id or file.name
            if key in seen:
                continue
            seen.add(key)
            merged.append(file)
    return merged


class SuggestionService:
    def __init__(self, catalog: ICatalog, *, fan_out: int = DEFAULT_FAN_OUT,
                 limit: int = DEFAULT_LIMIT) -> None:
        self._catalog = catalog
        self._fan_out = fan_out
        self._limit = limit

    def suggest(self, free_text: str) -> list[FileCandidate]:
        """Search each query token concurrently and return the best ``limit`` files.

        UpstreamError from any search propagates to the caller.
        """
        query = normalize(free_text)
        if not query:
            return []
        tokens = search_tokens(query, self._fan_out)
        if not tokens:
            return []

        with ThreadPoolExecutor(max_workers=len(tokens)) as pool:
            result_sets = list(pool.map(self._catalog.search, tokens))

        files = merge_unique(result_sets)
        scored = [(f, score_match(query, f.full_name)) for f in files]
        ranked = rank_candidates(((f, s) for f, s in scored if s > 0), self._limit)
        logger.debug("suggest_ranked", query=query, tokens=tokens,
                     candidates=len(files), returned=len(ranked))
        return [FileCandidate.from_file(f, s) for f, s in ranked]
