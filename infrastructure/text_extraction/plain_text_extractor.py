"""Extractor for uploads that are already plain text."""
from __future__ import annotations

from domain.interfaces import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Decode raw bytes as text; strings are returned unchanged.

    The default ``utf-8-sig`` codec drops a leading byte-order mark, which
    text editors on some platforms prepend to saved notes.
    """

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def extract(self, source: bytes | str) -> str:
        if isinstance(source, str):
            return source
        return source.decode(self.encoding, errors="replace")


__all__ = ["PlainTextExtractor"]
