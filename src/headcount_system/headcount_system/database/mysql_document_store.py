from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from .connection import DatabaseConnection
from .document_store import DocumentKey, DocumentStore


class MySQLDocumentStore(DocumentStore):
    """One row per logical document in the `documents` table.

    Each call opens its own connection; a failed statement rolls back.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def _cursor(self) -> Iterator:
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor(dictionary=True)
            try:
                yield cur
                conn.commit()
            finally:
                cur.close()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def load(self, key: DocumentKey) -> Optional[str]:
        with self._cursor() as cur:
            cur.execute("SELECT doc_value FROM documents WHERE doc_key=%s", (DocumentKey(key).value,))
            row = cur.fetchone()
        return row["doc_value"] if row else None

    def save(self, key: DocumentKey, value: str) -> None:
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO documents(doc_key, doc_value)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE doc_value=VALUES(doc_value)
                """,
                (DocumentKey(key).value, value),
            )
