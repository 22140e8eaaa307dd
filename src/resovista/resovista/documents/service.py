from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from werkzeug.utils import secure_filename

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..core.constants import SIGNED_URL_TTL
from ..core.exceptions import NotFoundError, ValidationError
from ..storage.blob_storage import BlobStorage
from ..users.model import CurrentUser
from .model import Document
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(
        self,
        documents: DocumentRepository,
        blobs: BlobStorage,
        *,
        clock: Clock = now_utc,
        url_ttl: int = SIGNED_URL_TTL,
    ):
        self._documents = documents
        self._blobs = blobs
        self._clock = clock
        self._url_ttl = url_ttl

    def upload(
        self,
        user: CurrentUser,
        *,
        file_name: Optional[str],
        data: Optional[bytes],
        content_type: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Document:
        if data is None or not file_name:
            raise ValidationError("No file provided")
        safe_name = secure_filename(file_name)
        if not safe_name:
            raise ValidationError("Invalid file name")

        now = self._clock()
        millis = to_millis(now)
        storage_path = f"{user.id}/{millis}-{safe_name}"
        self._blobs.upload(storage_path, data, content_type=content_type)

        document = Document(
            id=f"document:{user.id}:{millis}",
            user_id=user.id,
            title=title,
            description=description,
            category=category,
            file_name=file_name,
            file_size=len(data),
            file_type=content_type,
            storage_path=storage_path,
            url=self._blobs.create_signed_url(storage_path, expires_in=self._url_ttl),
            uploaded_at=to_iso(now),
        )
        self._documents.save(document)
        logger.info("Uploaded %s for %s (%d bytes)", storage_path, user.id, len(data))
        return document

    def list_for(self, user: CurrentUser) -> Sequence[Document]:
        return self._documents.list_for_user(user.id)

    def delete(self, user: CurrentUser, document_id: str) -> None:
        document = self._documents.get(document_id)
        if not document or document.user_id != user.id:
            raise NotFoundError("Not found or unauthorized")

        # Two independent steps; a failure between them leaves the metadata behind.
        self._blobs.remove([document.storage_path])
        self._documents.delete(document_id)
        logger.info("Deleted %s", document_id)

    def resolve_download(self, token: str) -> Path:
        """Filesystem path behind a signed download token."""
        return self._blobs.local_path(self._blobs.resolve_signed_token(token))
