"""Use cases that retrieve grounding text from a stored document."""
from __future__ import annotations

import logging
from typing import Sequence

from domain.entities import ScoredChunk
from domain.errors import DocumentNotFoundError, NoRelevantContentError
from domain.interfaces import ChunkRepository, ChunkRetriever, DocumentRepository
from infrastructure.splitting.paragraph_splitter import PARAGRAPH_SEPARATOR

logger = logging.getLogger(__name__)


def find_relevant_chunks(
    document_id: str,
    query: str | None,
    *,
    retriever: ChunkRetriever,
    document_repository: DocumentRepository,
    chunk_repository: ChunkRepository,
    max_results: int = 3,
) -> list[ScoredChunk]:
    """Rank the stored chunks of a document against ``query``."""

    if document_repository.get(document_id) is None:
        raise DocumentNotFoundError(document_id)
    chunks = chunk_repository.list_for_document(document_id)
    return retriever.find_relevant(chunks, query, max_results)


def build_grounding_context(results: Sequence[ScoredChunk]) -> str:
    """Join retrieved chunk contents, in the order given, into one context block."""

    return PARAGRAPH_SEPARATOR.join(result.content for result in results)


def document_text(
    document_id: str,
    *,
    document_repository: DocumentRepository,
    chunk_repository: ChunkRepository,
) -> str:
    """Return the full text used for whole-document generation tasks.

    Stored chunks are joined in index order; a document without chunks falls
    back to its extracted content.
    """

    document = document_repository.get(document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    chunks = chunk_repository.list_for_document(document_id)
    if chunks:
        return PARAGRAPH_SEPARATOR.join(chunk.content for chunk in chunks)
    return document.content


def explain_concept_context(
    document_id: str,
    concept: str,
    *,
    retriever: ChunkRetriever,
    document_repository: DocumentRepository,
    chunk_repository: ChunkRepository,
    max_results: int = 3,
) -> str:
    """Return grounding context for explaining ``concept``.

    Raises:
        NoRelevantContentError: if the document yields no chunk for the concept.
    """

    results = find_relevant_chunks(
        document_id,
        concept,
        retriever=retriever,
        document_repository=document_repository,
        chunk_repository=chunk_repository,
        max_results=max_results,
    )
    if not results:
        logger.info("No content for concept %r in document %s", concept, document_id)
        raise NoRelevantContentError(f"No relevant content found for '{concept}'")
    return build_grounding_context(results)


__all__ = [
    "build_grounding_context",
    "document_text",
    "explain_concept_context",
    "find_relevant_chunks",
]
