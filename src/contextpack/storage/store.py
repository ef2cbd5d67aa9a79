"""SQLite-backed document repository."""

import asyncio
import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from contextpack.errors import RepositoryError
from contextpack.models import Chunk, Document
from contextpack.storage.schema import SCHEMA

logger = logging.getLogger(__name__)


class DocumentStore:
    """SQLite-backed storage for processed documents.

    The synchronous methods do the work; the async ``get_all``/``add``/
    ``delete`` trio implements the DocumentRepository protocol by running
    them in a worker thread.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections.

        sqlite3 errors are re-raised as RepositoryError.
        """
        try:
            conn = sqlite3.connect(self.path)
        except sqlite3.Error as err:
            raise RepositoryError(f"Cannot open {self.path}: {err}") from err

        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as err:
            conn.rollback()
            raise RepositoryError(str(err)) from err
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    def add_document(self, doc: Document) -> Document:
        """Store a document with its chunks and return it with its new id."""
        upload_date = doc.upload_date or datetime.now(timezone.utc).isoformat()
        with self.connection() as conn:
            cursor = conn.execute(
                """INSERT INTO documents
                   (file_name, file_size, file_type, num_pages, text,
                    total_tokens, metadata, type, upload_date)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    doc.file_name,
                    doc.file_size,
                    doc.file_type,
                    doc.num_pages,
                    doc.text,
                    doc.total_tokens,
                    json.dumps(doc.metadata, default=str),
                    doc.type,
                    upload_date,
                ),
            )
            doc_id = cursor.lastrowid
            conn.executemany(
                """INSERT INTO chunks (document_id, chunk_index, text, tokens, sentences)
                   VALUES (?, ?, ?, ?, ?)""",
                [
                    (doc_id, chunk.index, chunk.text, chunk.tokens, chunk.sentences)
                    for chunk in doc.chunks
                ],
            )
        logger.debug(f"Stored {doc.file_name} as document {doc_id}")
        return doc.with_id(doc_id, upload_date)

    def list_documents(self) -> list[Document]:
        """Return all documents in upload order."""
        with self.connection() as conn:
            rows = conn.execute("SELECT * FROM documents ORDER BY id").fetchall()
            chunk_rows = conn.execute(
                "SELECT * FROM chunks ORDER BY document_id, chunk_index"
            ).fetchall()

        chunks_by_doc: dict[int, list[sqlite3.Row]] = {}
        for row in chunk_rows:
            chunks_by_doc.setdefault(row["document_id"], []).append(row)

        return [self._decode(row, chunks_by_doc.get(row["id"], [])) for row in rows]

    def get_document(self, doc_id: int) -> Optional[Document]:
        """Return one document, or None if the id is unknown."""
        with self.connection() as conn:
            row = conn.execute("SELECT * FROM documents WHERE id = ?", (doc_id,)).fetchone()
            if row is None:
                return None
            chunk_rows = conn.execute(
                "SELECT * FROM chunks WHERE document_id = ? ORDER BY chunk_index",
                (doc_id,),
            ).fetchall()
        return self._decode(row, chunk_rows)

    def delete_document(self, doc_id: int) -> bool:
        """Delete a document and its chunks. Returns False if it did not exist."""
        with self.connection() as conn:
            cursor = conn.execute("DELETE FROM documents WHERE id = ?", (doc_id,))
            return cursor.rowcount > 0

    def clear(self) -> None:
        """Delete every document."""
        with self.connection() as conn:
            conn.execute("DELETE FROM chunks")
            conn.execute("DELETE FROM documents")

    # DocumentRepository protocol

    async def get_all(self) -> list[Document]:
        return await asyncio.to_thread(self.list_documents)

    async def add(self, doc: Document) -> Document:
        return await asyncio.to_thread(self.add_document, doc)

    async def delete(self, doc_id: int) -> None:
        deleted = await asyncio.to_thread(self.delete_document, doc_id)
        if not deleted:
            logger.warning(f"Document not found: {doc_id}")

    @classmethod
    def _decode(cls, row: sqlite3.Row, chunk_rows: list[sqlite3.Row]) -> Document:
        """Rebuild a Document from its rows; undecodable rows raise RepositoryError."""
        try:
            chunks = [cls._row_to_chunk(r) for r in chunk_rows]
            return cls._row_to_document(row, chunks)
        except (ValueError, TypeError, KeyError) as err:
            raise RepositoryError(f"Corrupt document row {row['id']}: {err}") from err

    @staticmethod
    def _row_to_chunk(row: sqlite3.Row) -> Chunk:
        return Chunk(
            index=row["chunk_index"],
            text=row["text"],
            tokens=row["tokens"],
            sentences=row["sentences"],
        )

    @staticmethod
    def _row_to_document(row: sqlite3.Row, chunks: list[Chunk]) -> Document:
        return Document(
            id=row["id"],
            file_name=row["file_name"],
            file_size=row["file_size"],
            file_type=row["file_type"] or "",
            num_pages=row["num_pages"],
            text=row["text"],
            chunks=tuple(chunks),
            total_tokens=row["total_tokens"],
            metadata=json.loads(row["metadata"]) if row["metadata"] else {},
            type=row["type"],
            upload_date=row["upload_date"],
        )
