"""Fixed-size sliding windows over a word sequence."""
from __future__ import annotations

from typing import Iterator, Sequence

from domain.errors import InvalidParameterError


def validate_window(size: int, overlap: int) -> None:
    """Reject window parameters that cannot make forward progress."""

    if size <= 0:
        raise InvalidParameterError(f"size must be positive, got {size}")
    if overlap < 0:
        raise InvalidParameterError(f"overlap must be non-negative, got {overlap}")
    if overlap >= size:
        raise InvalidParameterError(f"overlap ({overlap}) must be less than size ({size})")


def word_windows(words: Sequence[str], size: int, overlap: int) -> Iterator[list[str]]:
    """Yield windows of ``size`` words, each starting ``size - overlap`` words after the last.

    The final window always reaches the end of ``words``; no window is yielded
    for an empty sequence.
    """

    validate_window(size, overlap)
    stride = size - overlap
    for start in range(0, len(words), stride):
        yield list(words[start : start + size])
        if start + size >= len(words):
            break


__all__ = ["validate_window", "word_windows"]
