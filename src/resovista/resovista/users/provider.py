from __future__ import annotations

import logging
import uuid
from typing import Optional, Protocol

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import Clock, now_utc, to_iso
from ..core.constants import DEFAULT_TOKEN_MAX_AGE
from ..core.exceptions import AuthenticationError, ValidationError
from ..storage.kv_store import KVStore
from .model import AuthUser

logger = logging.getLogger(__name__)


class AuthProvider(Protocol):
    """Identity provider: owns credentials and access tokens.

    Services depend on this interface only, so a hosted provider can replace
    the KV-backed one without touching the feature modules.
    """

    def create_user(self, *, email: str, password: str, user_metadata: dict) -> AuthUser:
        raise NotImplementedError

    def sign_in_with_password(self, *, email: str, password: str) -> AuthUser:
        raise NotImplementedError

    def issue_token(self, user: AuthUser) -> str:
        raise NotImplementedError

    def get_user(self, token: str) -> Optional[AuthUser]:
        raise NotImplementedError


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class KVAuthProvider(AuthProvider):
    """Credentials at ``auth:{email}``; bearer tokens signed with itsdangerous."""

    def __init__(
        self,
        kv: KVStore,
        *,
        secret_key: str,
        token_max_age: int = DEFAULT_TOKEN_MAX_AGE,
        clock: Clock = now_utc,
    ):
        self._kv = kv
        self._serializer = URLSafeTimedSerializer(secret_key, salt="access-token")
        self._token_max_age = int(token_max_age)
        self._clock = clock

    @staticmethod
    def _key(email: str) -> str:
        return f"auth:{_normalize_email(email)}"

    @staticmethod
    def _to_user(record: dict) -> AuthUser:
        return AuthUser(id=record["id"], email=record["email"], user_metadata=dict(record.get("user_metadata") or {}))

    def create_user(self, *, email: str, password: str, user_metadata: dict) -> AuthUser:
        key = self._key(email)
        if self._kv.get(key):
            raise ValidationError("A user with this email address has already been registered")

        record = {
            "id": str(uuid.uuid4()),
            "email": _normalize_email(email),
            "password_hash": generate_password_hash(password),
            "user_metadata": dict(user_metadata),
            "email_confirmed_at": to_iso(self._clock()),
        }
        self._kv.set(key, record)
        logger.info("Registered auth user %s", record["id"])
        return self._to_user(record)

    def sign_in_with_password(self, *, email: str, password: str) -> AuthUser:
        record = self._kv.get(self._key(email))
        if not record:
            raise AuthenticationError("Invalid login credentials")

        try:
            ok = check_password_hash(record.get("password_hash", ""), password)
        except ValueError:
            # e.g. corrupted or placeholder hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid login credentials")
        return self._to_user(record)

    def issue_token(self, user: AuthUser) -> str:
        return self._serializer.dumps({"sub": user.id, "email": user.email})

    def get_user(self, token: str) -> Optional[AuthUser]:
        try:
            payload = self._serializer.loads(token, max_age=self._token_max_age)
        except SignatureExpired:
            logger.debug("Rejected expired access token")
            return None
        except BadSignature:
            return None

        record = self._kv.get(self._key(str(payload.get("email", ""))))
        if not record or record.get("id") != payload.get("sub"):
            return None
        return self._to_user(record)
