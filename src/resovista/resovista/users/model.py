from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import Role

_PROFILE_FIELDS = ("id", "email", "name", "role", "created_at", "updated_at", "profile_complete")


@dataclass(frozen=True)
class AuthUser:
    """Identity as known by the auth provider."""

    id: str
    email: str
    user_metadata: dict = field(default_factory=dict)

    @property
    def role(self) -> Optional[Role]:
        try:
            return Role(self.user_metadata.get("role"))
        except ValueError:
            return None

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email, "user_metadata": dict(self.user_metadata)}


@dataclass(frozen=True)
class UserProfile:
    """Profile record stored at ``user:{id}``.

    Arbitrary profile fields sent by the client are kept in ``extra``.
    """

    id: str
    email: str
    name: str
    role: Role
    created_at: str
    profile_complete: bool = False
    updated_at: Optional[str] = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(
            id=self.id,
            email=self.email,
            name=self.name,
            role=self.role.value,
            created_at=self.created_at,
            profile_complete=self.profile_complete,
        )
        if self.updated_at is not None:
            data["updated_at"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        return cls(
            id=str(data["id"]),
            email=str(data.get("email", "")),
            name=str(data.get("name", "")),
            role=Role(data.get("role", Role.STUDENT.value)),
            created_at=str(data.get("created_at", "")),
            profile_complete=bool(data.get("profile_complete", False)),
            updated_at=data.get("updated_at"),
            extra={k: v for k, v in data.items() if k not in _PROFILE_FIELDS},
        )


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller of a request."""

    id: str
    email: str
    role: Optional[Role]
    name: str = ""

    @property
    def is_staff(self) -> bool:
        return self.role in (Role.TEACHER, Role.ADMIN)
