"""Lexical keyword retriever that ranks chunks by query term matches."""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Sequence

from domain.entities import Chunk, ScoredChunk
from domain.errors import InvalidParameterError
from domain.interfaces import ChunkRetriever

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 3
MIN_TOKEN_LENGTH = 3

STOP_WORDS = frozenset(
    {
        "the", "is", "at", "which", "on", "a", "an", "and", "or", "but",
        "in", "with", "to", "for", "of", "as", "by", "this", "that", "it",
    }
)


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Tunable weights of the keyword scoring formula."""

    exact_match: float = 3.0
    partial_match: float = 1.0
    co_occurrence: float = 2.0
    position: float = 0.1


DEFAULT_WEIGHTS = ScoringWeights()


def tokenize_query(query: str) -> list[str]:
    """Lowercase, split on whitespace and drop short tokens and stop words."""

    return [
        token
        for token in query.lower().split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def count_matches(content: str, token: str) -> tuple[int, int]:
    """Return ``(exact, partial)`` occurrence counts of ``token`` in ``content``.

    An exact match is an occurrence not touching a word character on either
    side; every other occurrence is partial. ``token`` is matched literally.
    """

    total = content.count(token)
    if total == 0:
        return 0, 0
    exact = len(re.findall(rf"(?<!\w){re.escape(token)}(?!\w)", content))
    return exact, max(total - exact, 0)


def position_bonus(index: int, total: int, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    return 1 - (index / total) * weights.position


def rank(scored: Sequence[ScoredChunk], max_results: int) -> list[ScoredChunk]:
    """Drop non-positive scores and order best first with deterministic tie-breaks."""

    kept = [item for item in scored if item.score > 0]
    kept.sort(key=lambda item: (-item.score, -item.matched_words, item.chunk_index))
    return kept[:max_results]


def positional_defaults(chunks: Sequence[Chunk], max_results: int) -> list[ScoredChunk]:
    """Leading chunks in original order, used when a query has no usable terms."""

    return [
        ScoredChunk(chunk=chunk, score=0.0, raw_score=0.0, matched_words=0)
        for chunk in chunks[:max_results]
    ]


def validate_max_results(max_results: int) -> None:
    if max_results < 0:
        raise InvalidParameterError(f"max_results must be non-negative, got {max_results}")


def find_relevant(
    chunks: Sequence[Chunk],
    query: str | None,
    max_results: int = DEFAULT_MAX_RESULTS,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[ScoredChunk]:
    """Return up to ``max_results`` chunks ranked by keyword relevance to ``query``."""

    validate_max_results(max_results)
    if not chunks or query is None:
        return []

    tokens = list(dict.fromkeys(tokenize_query(query)))
    if not tokens:
        logger.debug("Query %r has no usable terms, returning leading chunks", query)
        return positional_defaults(chunks, max_results)

    total = len(chunks)
    scored: list[ScoredChunk] = []
    for index, chunk in enumerate(chunks):
        content = chunk.content.lower()
        raw_score = 0.0
        matched_words = 0
        for token in tokens:
            exact, partial = count_matches(content, token)
            if exact > 0:
                matched_words += 1
            raw_score += exact * weights.exact_match + partial * weights.partial_match

        if matched_words > 1:
            raw_score += matched_words * weights.co_occurrence

        normalized = raw_score / math.sqrt(len(content.split()) or 1)
        scored.append(
            ScoredChunk(
                chunk=chunk,
                score=normalized + position_bonus(index, total, weights),
                raw_score=raw_score,
                matched_words=matched_words,
            )
        )

    results = rank(scored, max_results)
    logger.debug("Ranked %d chunks for %d query terms, returning %d", total, len(tokens), len(results))
    return results


class KeywordRetriever(ChunkRetriever):
    """Rank chunks with weighted exact/partial keyword matching."""

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        self.weights = weights or DEFAULT_WEIGHTS

    def find_relevant(
        self,
        chunks: Sequence[Chunk],
        query: str | None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[ScoredChunk]:
        return find_relevant(chunks, query, max_results, self.weights)


__all__ = [
    "DEFAULT_MAX_RESULTS",
    "DEFAULT_WEIGHTS",
    "MIN_TOKEN_LENGTH",
    "STOP_WORDS",
    "KeywordRetriever",
    "ScoringWeights",
    "count_matches",
    "find_relevant",
    "position_bonus",
    "positional_defaults",
    "rank",
    "tokenize_query",
    "validate_max_results",
]
