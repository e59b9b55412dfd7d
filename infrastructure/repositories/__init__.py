from infrastructure.repositories.sqlite_chunk_repository import SqliteChunkRepository
from infrastructure.repositories.sqlite_document_repository import SqliteDocumentRepository

__all__ = [
    "SqliteChunkRepository",
    "SqliteDocumentRepository",
]
