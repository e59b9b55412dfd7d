"""Exceptions raised by the StudyLens domain and its use cases."""
from __future__ import annotations


class StudyLensError(Exception):
    """Base class for all StudyLens errors."""


class InvalidParameterError(StudyLensError, ValueError):
    """A caller passed parameters that violate an operation's preconditions."""


class DocumentNotFoundError(StudyLensError, LookupError):
    """The requested document does not exist in the repository."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document '{document_id}' not found")
        self.document_id = document_id


class ExtractionError(StudyLensError):
    """No usable text could be extracted from an uploaded source."""


class NoRelevantContentError(StudyLensError):
    """Grounding was requested but no chunk matched the query."""


__all__ = [
    "StudyLensError",
    "InvalidParameterError",
    "DocumentNotFoundError",
    "ExtractionError",
    "NoRelevantContentError",
]
