"""BM25 ranking over a document's chunks."""
from __future__ import annotations

import logging
import re
from typing import Sequence

from rank_bm25 import BM25Okapi

from domain.entities import Chunk, ScoredChunk
from domain.interfaces import ChunkRetriever
from infrastructure.query.keyword_retriever import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_WEIGHTS,
    MIN_TOKEN_LENGTH,
    STOP_WORDS,
    ScoringWeights,
    position_bonus,
    positional_defaults,
    rank,
    validate_max_results,
)

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w+")


class Bm25Retriever(ChunkRetriever):
    """Score chunks with Okapi BM25 plus the same mild position preference as keyword search.

    The index is built per call from the chunks passed in, so the retriever
    holds no state between queries.
    """

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        self.weights = weights or DEFAULT_WEIGHTS

    def find_relevant(
        self,
        chunks: Sequence[Chunk],
        query: str | None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[ScoredChunk]:
        validate_max_results(max_results)
        if not chunks or query is None:
            return []

        query_tokens = list(
            dict.fromkeys(
                token
                for token in self._tokenize(query)
                if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
            )
        )
        if not query_tokens:
            return positional_defaults(chunks, max_results)

        corpus = [self._tokenize(chunk.content) for chunk in chunks]
        if any(corpus):
            values = [float(value) for value in BM25Okapi(corpus).get_scores(query_tokens)]
        else:
            values = [0.0] * len(chunks)

        total = len(chunks)
        distinct_tokens = set(query_tokens)
        scored = [
            ScoredChunk(
                chunk=chunk,
                score=value + position_bonus(index, total, self.weights),
                raw_score=value,
                matched_words=len(distinct_tokens.intersection(tokens)),
            )
            for index, (chunk, tokens, value) in enumerate(zip(chunks, corpus, values))
        ]
        results = rank(scored, max_results)
        logger.debug("BM25 ranked %d chunks, returning %d", total, len(results))
        return results

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        return _WORD.findall(text.lower())


__all__ = ["Bm25Retriever"]
