"""SQLite repository for document records and their processing status."""
from __future__ import annotations

import json
import sqlite3
import uuid
from pathlib import Path

from domain.entities import Document, DocumentStatus
from domain.errors import DocumentNotFoundError
from domain.interfaces import DocumentRepository


class SqliteDocumentRepository(DocumentRepository):
    """Store documents in a lightweight SQLite database."""

    def __init__(self, db_path: str | Path = "studylens.db") -> None:
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL DEFAULT '',
                    content TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'processing',
                    metadata TEXT NOT NULL
                )
                """
            )

    def add(self, document: Document) -> None:
        if not document.id:
            document.id = str(uuid.uuid4())
        with self._connect() as conn:
            conn.execute(
                """
                REPLACE INTO documents (id, title, content, status, metadata)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    document.id,
                    document.title,
                    document.content,
                    document.status,
                    json.dumps(document.metadata),
                ),
            )

    def list(self) -> list[Document]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, title, content, status, metadata FROM documents ORDER BY id"
            ).fetchall()
        return [self._from_row(row) for row in rows]

    def get(self, document_id: str) -> Document | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, title, content, status, metadata FROM documents WHERE id = ?",
                (document_id,),
            ).fetchone()
        if row is None:
            return None
        return self._from_row(row)

    def set_status(self, document_id: str, status: DocumentStatus) -> None:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE documents SET status = ? WHERE id = ?",
                (status, document_id),
            )
            if cursor.rowcount == 0:
                raise DocumentNotFoundError(document_id)

    def delete(self, document_id: str) -> None:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM documents WHERE id = ?", (document_id,))
            if cursor.rowcount == 0:
                raise DocumentNotFoundError(document_id)

    @staticmethod
    def _from_row(row: tuple) -> Document:
        return Document(
            id=row[0],
            title=row[1] or "",
            content=row[2] or "",
            status=row[3],
            metadata=json.loads(row[4]),
        )


__all__ = ["SqliteDocumentRepository"]
