from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Document:
    """Metadata for an uploaded file; the bytes live in blob storage at ``storage_path``."""

    id: str
    user_id: str
    title: Optional[str]
    description: Optional[str]
    category: Optional[str]
    file_name: str
    file_size: int
    file_type: Optional[str]
    storage_path: str
    url: str
    uploaded_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "fileType": self.file_type,
            "storagePath": self.storage_path,
            "url": self.url,
            "uploadedAt": self.uploaded_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        return cls(
            id=str(data["id"]),
            user_id=str(data["userId"]),
            title=data.get("title"),
            description=data.get("description"),
            category=data.get("category"),
            file_name=str(data.get("fileName", "")),
            file_size=int(data.get("fileSize") or 0),
            file_type=data.get("fileType"),
            storage_path=str(data["storagePath"]),
            url=str(data.get("url", "")),
            uploaded_at=str(data.get("uploadedAt", "")),
        )
