"""Additive fuzzy scoring of candidate filenames against a query."""

from __future__ import annotations

from typing import Iterable, TypeVar

from printlink.matching.normalizer import normalize

T = TypeVar("T")

EXACT_SCORE = 100
TOKEN_SCORE = 8
SUBSTRING_SCORE = 4
COMPACT_BONUS = 10
PHRASE_BONUS = 6


def score_match(query: str, candidate_name: str) -> int:
    """Score ``candidate_name`` against an already-normalized ``query``.

    An exact normalized match short-circuits to 100. Otherwise the score is
    the sum of per-token hits and two containment bonuses, so a near
    duplicate can outrank a differently formatted exact name.
    """
    candidate = normalize(candidate_name)
    if not candidate:
        return 0
    if candidate == query:
        return EXACT_SCORE

    score = 0
    candidate_tokens = candidate.split(" ")
    for token in (t for t in query.split(" ") if len(t) > 1):
        if token in candidate_tokens:
            score += TOKEN_SCORE
        elif token in candidate:
            score += SUBSTRING_SCORE

    compact_query = "".join(query.split())
    compact_candidate = "".join(candidate.split())
    if len(compact_query) > 3 and compact_query in compact_candidate:
        score += COMPACT_BONUS

    if query in candidate:
        score += PHRASE_BONUS

    return score


def rank_candidates(scored: Iterable[tuple[T, int]], limit: int | None = None) -> list[tuple[T, int]]:
    """Sort (item, score) pairs by score descending; ties keep input order."""
    ranked = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return ranked if limit is None else ranked[:limit]
