"""SQLite repository for document chunk sequences."""
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Sequence

from domain.entities import Chunk
from domain.interfaces import ChunkRepository


class SqliteChunkRepository(ChunkRepository):
    """Store each document's chunks in a shared SQLite database.

    A document's chunk list is only ever replaced as a whole, inside a single
    transaction, so readers never observe a partially written sequence.
    """

    def __init__(self, db_path: str | Path = "studylens.db") -> None:
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS chunks (
                    document_id TEXT NOT NULL,
                    chunk_index INTEGER NOT NULL,
                    page_number INTEGER NOT NULL DEFAULT 0,
                    content TEXT NOT NULL,
                    PRIMARY KEY (document_id, chunk_index)
                )
                """
            )

    def replace(self, document_id: str, chunks: Sequence[Chunk]) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM chunks WHERE document_id = ?", (document_id,))
            conn.executemany(
                """
                INSERT INTO chunks (document_id, chunk_index, page_number, content)
                VALUES (?, ?, ?, ?)
                """,
                [(document_id, chunk.chunk_index, chunk.page_number, chunk.content) for chunk in chunks],
            )

    def list_for_document(self, document_id: str) -> list[Chunk]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT content, chunk_index, page_number FROM chunks
                WHERE document_id = ? ORDER BY chunk_index
                """,
                (document_id,),
            ).fetchall()
        return [Chunk(content=row[0], chunk_index=row[1], page_number=row[2]) for row in rows]

    def delete(self, document_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM chunks WHERE document_id = ?", (document_id,))


__all__ = ["SqliteChunkRepository"]
