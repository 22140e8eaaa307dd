from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.datetime_utils import Clock, now_utc, to_iso
from ..common.validators import (require_bool, require_enum, require_fields, require_min_length,
                                 require_non_empty)
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import CurrentUser, UserProfile
from .provider import AuthProvider
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

# Profile fields a user cannot change through a profile update.
_PROTECTED_FIELDS = frozenset({"id", "email", "role", "created_at"})


@dataclass(frozen=True)
class SignInResult:
    access_token: str
    user: dict
    token_type: str = "bearer"


class AuthService:
    """Use cases: sign up, sign in, resolve bearer tokens, manage own profile."""

    def __init__(self, provider: AuthProvider, profiles: ProfileRepository, *, clock: Clock = now_utc):
        self._provider = provider
        self._profiles = profiles
        self._clock = clock

    def sign_up(self, *, email: str, password: str, name: str, role: Any) -> UserProfile:
        payload = {"email": email, "password": password, "name": name, "role": role}
        require_fields(payload, *payload, message="Email, password, name, and role are required")
        email = require_non_empty(email, "email")
        name = require_non_empty(name, "name")
        role = require_enum(role, Role, "role")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        created_at = to_iso(self._clock())
        auth_user = self._provider.create_user(
            email=email,
            password=password,
            user_metadata={"name": name, "role": role.value, "created_at": created_at},
        )

        profile = UserProfile(
            id=auth_user.id,
            email=auth_user.email,
            name=name,
            role=role,
            created_at=created_at,
            profile_complete=False,
        )
        self._profiles.save(profile)
        logger.info("Signed up %s as %s", profile.id, role.value)
        return profile

    def sign_in(self, *, email: str, password: str) -> SignInResult:
        require_fields({"email": email, "password": password}, "email", "password",
                       message="Email and password are required")
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password must be strings")
        auth_user = self._provider.sign_in_with_password(email=email, password=password)
        profile = self._profiles.get(auth_user.id)
        user = profile.to_dict() if profile else auth_user.to_dict()
        return SignInResult(access_token=self._provider.issue_token(auth_user), user=user)

    def authenticate(self, authorization: Optional[str]) -> CurrentUser:
        """Resolve an ``Authorization: Bearer <token>`` header to the caller."""
        if not authorization:
            raise AuthenticationError("Unauthorized")
        parts = authorization.split(" ")
        if len(parts) < 2 or not parts[1]:
            raise AuthenticationError("Unauthorized")

        auth_user = self._provider.get_user(parts[1])
        if not auth_user:
            raise AuthenticationError("Unauthorized")

        profile = self._profiles.get(auth_user.id)
        if profile:
            return CurrentUser(id=profile.id, email=profile.email, role=profile.role, name=profile.name)
        return CurrentUser(
            id=auth_user.id,
            email=auth_user.email,
            role=auth_user.role,
            name=str(auth_user.user_metadata.get("name", "")),
        )

    def get_profile(self, user: CurrentUser) -> dict:
        profile = self._profiles.get(user.id)
        if profile:
            return profile.to_dict()
        return {"id": user.id, "email": user.email, "name": user.name,
                "role": user.role.value if user.role else None}

    def update_profile(self, user: CurrentUser, updates: Mapping[str, Any]) -> UserProfile:
        if not isinstance(updates, Mapping):
            raise ValidationError("Profile updates must be a JSON object")

        existing = self._profiles.get(user.id)
        if existing:
            base = existing.to_dict()
        else:
            if user.role is None:
                raise ValidationError("Profile has no role")
            base = {"id": user.id, "email": user.email, "name": user.name,
                    "role": user.role.value, "created_at": to_iso(self._clock())}

        if "profile_complete" in updates:
            require_bool(updates["profile_complete"], "profile_complete")

        merged = dict(base)
        merged.update({k: v for k, v in updates.items() if k not in _PROTECTED_FIELDS})
        merged["id"] = user.id
        merged["updated_at"] = to_iso(self._clock())

        profile = UserProfile.from_dict(merged)
        self._profiles.save(profile)
        return profile
