from __future__ import annotations

from typing import Optional, Sequence

from ..storage.kv_store import KVStore
from .model import Document
from .repository import DocumentRepository


class KVDocumentRepository(DocumentRepository):
    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, document: Document) -> None:
        self._kv.set(document.id, document.to_dict())

    def get(self, document_id: str) -> Optional[Document]:
        if not document_id.startswith("document:"):
            return None
        data = self._kv.get(document_id)
        return Document.from_dict(data) if data else None

    def delete(self, document_id: str) -> None:
        self._kv.delete(document_id)

    def list_for_user(self, user_id: str) -> Sequence[Document]:
        return [Document.from_dict(d) for d in self._kv.get_by_prefix(f"document:{user_id}:")]
