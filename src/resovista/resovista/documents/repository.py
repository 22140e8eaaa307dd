from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Document


class DocumentRepository(Protocol):
    def save(self, document: Document) -> None:
        raise NotImplementedError

    def get(self, document_id: str) -> Optional[Document]:
        raise NotImplementedError

    def delete(self, document_id: str) -> None:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Document]:
        raise NotImplementedError
