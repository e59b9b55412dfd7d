"""Use case for ingesting documents into the system."""
from __future__ import annotations

import logging

from domain.entities import Document
from domain.errors import ExtractionError
from domain.interfaces import (
    ChunkRepository,
    ChunkSplitter,
    DocumentRepository,
    TextExtractor,
)

logger = logging.getLogger(__name__)


def ingest_document(
    document_id: str,
    source: bytes | str,
    *,
    extractor: TextExtractor,
    splitter: ChunkSplitter,
    document_repository: DocumentRepository,
    chunk_repository: ChunkRepository,
    title: str = "",
) -> Document:
    """Extract, segment and store a single document.

    The document is recorded as ``processing`` first and ends up ``ready`` once
    its chunks are stored. On any failure it is marked ``failed``, chunks left
    from an earlier ingest of the same id are dropped and the error propagates;
    a source without text raises :class:`ExtractionError`.
    """

    document = Document(id=document_id, content="", title=title, status="processing")
    document_repository.add(document)

    try:
        text = extractor.extract(source)
        if not text or not text.strip():
            raise ExtractionError(f"No text extracted from document '{document.id}'")
        chunks = splitter.split(text)
        chunk_repository.replace(document.id, chunks)
    except Exception:
        logger.warning("Processing failed for document %s", document.id)
        chunk_repository.replace(document.id, [])
        document_repository.set_status(document.id, "failed")
        document.status = "failed"
        raise

    document.content = text
    document.status = "ready"
    document.metadata["chunk_count"] = len(chunks)
    document_repository.add(document)
    logger.info("Document %s processed into %d chunks", document.id, len(chunks))
    return document


__all__ = ["ingest_document"]
