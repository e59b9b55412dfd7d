"""Use cases for looking up and removing stored documents."""
from __future__ import annotations

import logging

from domain.entities import Document
from domain.errors import DocumentNotFoundError
from domain.interfaces import ChunkRepository, DocumentRepository

logger = logging.getLogger(__name__)


def get_document(document_id: str, *, document_repository: DocumentRepository) -> Document:
    document = document_repository.get(document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    return document


def delete_document(
    document_id: str,
    *,
    document_repository: DocumentRepository,
    chunk_repository: ChunkRepository,
) -> None:
    """Remove a document together with the chunk sequence it owns."""

    get_document(document_id, document_repository=document_repository)
    chunk_repository.delete(document_id)
    document_repository.delete(document_id)
    logger.info("Document %s deleted", document_id)


__all__ = ["get_document", "delete_document"]
