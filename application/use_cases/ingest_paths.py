"""Use case for ingesting documents from filesystem paths."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from hashlib import sha256
from pathlib import Path
from typing import Iterable

from application.use_cases.ingest_documents import ingest_document
from domain.errors import ExtractionError
from domain.interfaces import ChunkRepository, ChunkSplitter, DocumentRepository, TextExtractor
from infrastructure.text_extraction.pdf_extractor import PdfExtractor
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestError:
    path: str
    reason: str


@dataclass(slots=True)
class IngestReport:
    total: int
    indexed: int
    document_ids: list[str] = field(default_factory=list)
    errors: list[IngestError] = field(default_factory=list)


EXTENSION_EXTRACTORS: dict[str, TextExtractor] = {
    ".pdf": PdfExtractor(),
    ".txt": PlainTextExtractor(),
    ".md": PlainTextExtractor(),
}


def extractor_for(path: Path) -> TextExtractor:
    try:
        return EXTENSION_EXTRACTORS[path.suffix.lower()]
    except KeyError as exc:
        raise ExtractionError(f"Unsupported file type: {path.suffix or path.name}") from exc


def ingest_paths(
    paths: Iterable[Path],
    *,
    splitter: ChunkSplitter,
    document_repository: DocumentRepository,
    chunk_repository: ChunkRepository,
) -> IngestReport:
    """Ingest every supported file found in the given files or directories.

    Files that fail extraction are reported and left as ``failed`` documents;
    the remaining files are still ingested.
    """

    files = collect_files(paths)
    report = IngestReport(total=len(files), indexed=0)

    for path in files:
        raw_bytes = path.read_bytes()
        try:
            document = ingest_document(
                document_id(raw_bytes),
                raw_bytes,
                extractor=extractor_for(path),
                splitter=splitter,
                document_repository=document_repository,
                chunk_repository=chunk_repository,
                title=path.name,
            )
        except ExtractionError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            report.errors.append(IngestError(path=str(path), reason=str(exc)))
            continue
        report.indexed += 1
        report.document_ids.append(document.id)

    return report


def collect_files(paths: Iterable[Path]) -> list[Path]:
    collected: list[Path] = []
    for path in paths:
        if path.is_dir():
            for file_path in sorted(path.rglob("*")):
                if file_path.is_file() and file_path.suffix.lower() in EXTENSION_EXTRACTORS:
                    collected.append(file_path)
        elif path.is_file() and path.suffix.lower() in EXTENSION_EXTRACTORS:
            collected.append(path)
    return collected


def document_id(raw_bytes: bytes) -> str:
    """Content-addressed id: identical files map to the same document."""

    return sha256(raw_bytes).hexdigest()[:32]


__all__ = ["ingest_paths", "collect_files", "extractor_for", "IngestReport", "IngestError"]
