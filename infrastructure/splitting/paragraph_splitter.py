"""Paragraph-aware chunk splitter with word-level overlap."""
from __future__ import annotations

import logging
import re

from domain.entities import Chunk
from domain.interfaces import ChunkSplitter
from infrastructure.splitting.word_window import validate_window, word_windows

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SIZE = 500
DEFAULT_OVERLAP = 50
PARAGRAPH_SEPARATOR = "\n\n"

_TABS = re.compile(r"\t+")
_INLINE_SPACE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")
_PARAGRAPH_BREAK = re.compile(r"\n{1,2}")


def normalize_text(text: str) -> str:
    """Collapse whitespace while keeping line and paragraph breaks."""

    text = text.replace("\r\n", "\n")
    text = _TABS.sub(" ", text)
    text = _INLINE_SPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    return text.strip()


def split_paragraphs(text: str) -> list[str]:
    paragraphs = (part.strip() for part in _PARAGRAPH_BREAK.split(text))
    return [paragraph for paragraph in paragraphs if paragraph]


def segment(
    text: str | None,
    target_size: int = DEFAULT_TARGET_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[Chunk]:
    """Split ``text`` into ordered chunks of roughly ``target_size`` words.

    Whole paragraphs are packed greedily. When a paragraph no longer fits, the
    buffer is emitted and the next one starts with the last ``overlap`` words
    of the emitted buffer. Paragraphs longer than ``target_size`` are cut into
    overlapping word windows of their own.

    Raises:
        InvalidParameterError: if ``target_size`` is not positive, ``overlap``
            is negative, or ``overlap >= target_size``.
    """

    validate_window(target_size, overlap)
    if not text or not text.strip():
        return []

    chunks: list[Chunk] = []

    def emit(content: str) -> None:
        chunks.append(Chunk(content=content, chunk_index=len(chunks), page_number=0))

    buffer: list[str] = []
    buffer_words = 0
    for paragraph in split_paragraphs(normalize_text(text)):
        words = paragraph.split()

        if len(words) > target_size:
            if buffer:
                emit(PARAGRAPH_SEPARATOR.join(buffer))
                buffer, buffer_words = [], 0
            for window in word_windows(words, target_size, overlap):
                emit(" ".join(window))
            continue

        if buffer and buffer_words + len(words) > target_size:
            emit(PARAGRAPH_SEPARATOR.join(buffer))
            tail = _overlap_tail(buffer, overlap)
            buffer = [" ".join(tail)] if tail else []
            buffer_words = len(tail)

        buffer.append(paragraph)
        buffer_words += len(words)

    if buffer:
        emit(PARAGRAPH_SEPARATOR.join(buffer))

    logger.debug("Segmented %d characters into %d chunks", len(text), len(chunks))
    return chunks


def _overlap_tail(buffer: list[str], overlap: int) -> list[str]:
    if overlap == 0:
        return []
    words = " ".join(buffer).split()
    return words[-min(overlap, len(words)) :]


class ParagraphSplitter(ChunkSplitter):
    """Split text into paragraph-aligned chunks with a word overlap."""

    def __init__(self, target_size: int = DEFAULT_TARGET_SIZE, overlap: int = DEFAULT_OVERLAP) -> None:
        validate_window(target_size, overlap)
        self.target_size = target_size
        self.overlap = overlap

    def split(self, text: str) -> list[Chunk]:
        return segment(text, self.target_size, self.overlap)


__all__ = [
    "DEFAULT_OVERLAP",
    "DEFAULT_TARGET_SIZE",
    "PARAGRAPH_SEPARATOR",
    "ParagraphSplitter",
    "normalize_text",
    "segment",
    "split_paragraphs",
]
