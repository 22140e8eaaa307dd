from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

_FEEDBACK_FIELDS = ("id", "userId", "subject", "message", "rating", "createdAt")


@dataclass(frozen=True)
class Feedback:
    id: str
    user_id: str
    subject: str
    message: str
    created_at: str
    rating: Optional[int] = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(subject=self.subject, message=self.message)
        if self.rating is not None:
            data["rating"] = self.rating
        data.update(id=self.id, userId=self.user_id, createdAt=self.created_at)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Feedback":
        return cls(
            id=str(data["id"]),
            user_id=str(data.get("userId", "")),
            subject=str(data.get("subject", "")),
            message=str(data.get("message", "")),
            created_at=str(data.get("createdAt", "")),
            rating=data.get("rating"),
            extra={k: v for k, v in data.items() if k not in _FEEDBACK_FIELDS},
        )
