from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, Sequence

from itsdangerous import BadSignature, URLSafeTimedSerializer

from ..core.constants import SIGNED_URL_TTL
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class BlobStorage(Protocol):
    """Object storage for uploaded documents."""

    def ensure_bucket(self) -> bool:
        raise NotImplementedError

    def upload(self, path: str, data: bytes, *, content_type: str | None = None) -> None:
        raise NotImplementedError

    def remove(self, paths: Sequence[str]) -> None:
        raise NotImplementedError

    def local_path(self, path: str) -> Path:
        raise NotImplementedError

    def create_signed_url(self, path: str, *, expires_in: int = SIGNED_URL_TTL) -> str:
        raise NotImplementedError

    def resolve_signed_token(self, token: str) -> str:
        raise NotImplementedError


class LocalBlobStorage(BlobStorage):
    """Bucket kept as a directory on the local filesystem.

    Signed URLs carry an itsdangerous token naming the object path and its
    validity; the download endpoint resolves the token back to the path.
    """

    def __init__(self, root_dir: str | Path, *, bucket: str, secret_key: str, url_base: str):
        self._bucket_dir = Path(root_dir) / bucket
        self._bucket = bucket
        self._url_base = url_base.rstrip("/")
        self._serializer = URLSafeTimedSerializer(secret_key, salt=f"blob:{bucket}")

    @property
    def bucket(self) -> str:
        return self._bucket

    def ensure_bucket(self) -> bool:
        if self._bucket_dir.is_dir():
            return False
        self._bucket_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Created documents storage bucket %s", self._bucket)
        return True

    def local_path(self, path: str) -> Path:
        base = self._bucket_dir.resolve()
        target = (base / path).resolve()
        if base != target and base not in target.parents:
            raise ValidationError("Invalid storage path")
        return target

    def upload(self, path: str, data: bytes, *, content_type: str | None = None) -> None:
        target = self.local_path(path)
        if target.exists():
            raise ValidationError("The resource already exists")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.debug("Stored %s (%d bytes, %s)", path, len(data), content_type or "unknown type")

    def remove(self, paths: Sequence[str]) -> None:
        for path in paths:
            target = self.local_path(path)
            if target.is_file():
                target.unlink()

    def create_signed_url(self, path: str, *, expires_in: int = SIGNED_URL_TTL) -> str:
        token = self._serializer.dumps({"path": path, "ttl": int(expires_in)})
        return f"{self._url_base}/{token}"

    def resolve_signed_token(self, token: str) -> str:
        try:
            payload, signed_at = self._serializer.loads(token, return_timestamp=True)
        except BadSignature:
            raise NotFoundError("Invalid or expired link") from None

        age = (datetime.now(timezone.utc) - signed_at).total_seconds()
        if age > int(payload.get("ttl", SIGNED_URL_TTL)):
            raise NotFoundError("Invalid or expired link")

        path = str(payload.get("path", ""))
        if not self.local_path(path).is_file():
            raise NotFoundError("Object not found")
        return path
