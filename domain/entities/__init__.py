"""Domain entities for the StudyLens system."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

DocumentStatus = Literal["processing", "ready", "failed"]


@dataclass(slots=True)
class Document:
    """An uploaded study document as seen by the storage layer."""

    id: str
    content: str
    title: str = ""
    status: DocumentStatus = "processing"
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Chunk:
    """An immutable, ordered piece of a document's text used for retrieval."""

    content: str
    chunk_index: int
    page_number: int = 0

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("Chunk content must not be empty")
        if self.chunk_index < 0:
            raise ValueError(f"chunk_index must be >= 0, got {self.chunk_index}")
        if self.page_number < 0:
            raise ValueError(f"page_number must be >= 0, got {self.page_number}")


@dataclass(frozen=True, slots=True)
class ScoredChunk:
    """A chunk paired with its relevance score for a single query."""

    chunk: Chunk
    score: float
    raw_score: float
    matched_words: int

    @property
    def content(self) -> str:
        return self.chunk.content

    @property
    def chunk_index(self) -> int:
        return self.chunk.chunk_index

    @property
    def page_number(self) -> int:
        return self.chunk.page_number


__all__ = [
    "Document",
    "DocumentStatus",
    "Chunk",
    "ScoredChunk",
]
