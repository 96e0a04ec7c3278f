from __future__ import annotations

from typing import Dict, Optional

from .document_store import DocumentKey, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Process-local store; keeps serialized text so callers never share objects."""

    def __init__(self, initial: Optional[Dict[DocumentKey, str]] = None):
        self._docs: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: DocumentKey) -> Optional[str]:
        return self._docs.get(DocumentKey(key).value)

    def save(self, key: DocumentKey, value: str) -> None:
        self._docs[DocumentKey(key).value] = str(value)
