"""PDF extractor built on PyPDF2."""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from domain.errors import ExtractionError
from domain.interfaces import TextExtractor

logger = logging.getLogger(__name__)

MAX_PAGES = 500


class PdfExtractor(TextExtractor):
    """Extract page text from a PDF given as raw bytes or a file path.

    Pages are separated by a blank line so that page breaks survive as
    paragraph breaks during segmentation.
    """

    def __init__(self, max_pages: int = MAX_PAGES) -> None:
        self.max_pages = max_pages

    def extract(self, source: bytes | str) -> str:
        stream = BytesIO(source) if isinstance(source, bytes) else Path(source)
        try:
            reader = PdfReader(stream)
            pages = reader.pages
            texts: list[str] = []
            for number, page in enumerate(pages):
                if number >= self.max_pages:
                    logger.warning("PDF has %d pages, extracting the first %d", len(pages), self.max_pages)
                    break
                page_text = page.extract_text() or ""
                if page_text.strip():
                    texts.append(page_text)
        except (PdfReadError, OSError) as exc:
            raise ExtractionError(f"Could not read PDF: {exc}") from exc
        return "\n\n".join(texts)


__all__ = ["PdfExtractor"]
