from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

_TODO_FIELDS = ("id", "userId", "title", "completed", "createdAt", "updatedAt")


@dataclass(frozen=True)
class Todo:
    id: str
    user_id: str
    title: str
    created_at: str
    completed: bool = False
    updated_at: Optional[str] = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(
            id=self.id,
            userId=self.user_id,
            title=self.title,
            completed=self.completed,
            createdAt=self.created_at,
        )
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Todo":
        return cls(
            id=str(data["id"]),
            user_id=str(data["userId"]),
            title=str(data.get("title", "")),
            created_at=str(data.get("createdAt", "")),
            completed=bool(data.get("completed", False)),
            updated_at=data.get("updatedAt"),
            extra={k: v for k, v in data.items() if k not in _TODO_FIELDS},
        )
