"""Abstract interfaces for the StudyLens system."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from domain.entities import Chunk, Document, DocumentStatus, ScoredChunk


class TextExtractor(ABC):
    """Extracts text from user provided sources (files, raw bytes, etc.)."""

    @abstractmethod
    def extract(self, source: bytes | str) -> str:
        """Return the textual representation of a source."""


class ChunkSplitter(ABC):
    """Splits a text blob into ordered chunks for retrieval."""

    @abstractmethod
    def split(self, text: str) -> list[Chunk]:
        """Return chunks for the provided text in source order."""


class ChunkRetriever(ABC):
    """Ranks a document's chunks by relevance to a query."""

    @abstractmethod
    def find_relevant(
        self,
        chunks: Sequence[Chunk],
        query: str | None,
        max_results: int = 3,
    ) -> list[ScoredChunk]:
        """Return at most ``max_results`` scored chunks, best first."""


class DocumentRepository(ABC):
    """Persists documents and their processing status."""

    @abstractmethod
    def add(self, document: Document) -> None:
        """Store a document record."""

    @abstractmethod
    def list(self) -> list[Document]:
        """Return all stored documents."""

    @abstractmethod
    def get(self, document_id: str) -> Document | None:
        """Retrieve a document by id."""

    @abstractmethod
    def set_status(self, document_id: str, status: DocumentStatus) -> None:
        """Update the processing status of a stored document."""

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Remove a stored document, raising if it does not exist."""


class ChunkRepository(ABC):
    """Owns the chunk sequence of every document."""

    @abstractmethod
    def replace(self, document_id: str, chunks: Sequence[Chunk]) -> None:
        """Replace the whole chunk sequence stored for a document."""

    @abstractmethod
    def list_for_document(self, document_id: str) -> list[Chunk]:
        """Return a document's chunks ordered by ``chunk_index``."""

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Drop every chunk stored for a document."""


__all__ = [
    "TextExtractor",
    "ChunkSplitter",
    "ChunkRetriever",
    "DocumentRepository",
    "ChunkRepository",
]
