from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import NotificationType, Priority


@dataclass(frozen=True)
class Notification:
    id: str
    recipient_id: str
    sender_id: str
    title: str
    message: str
    type: NotificationType
    priority: Priority
    created_at: str
    read: bool = False
    read_at: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "recipientId": self.recipient_id,
            "senderId": self.sender_id,
            "title": self.title,
            "message": self.message,
            "type": self.type.value,
            "priority": self.priority.value,
            "read": self.read,
            "createdAt": self.created_at,
        }
        if self.read_at is not None:
            data["readAt"] = self.read_at
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Notification":
        return cls(
            id=str(data["id"]),
            recipient_id=str(data["recipientId"]),
            sender_id=str(data.get("senderId", "")),
            title=str(data.get("title", "")),
            message=str(data.get("message", "")),
            type=NotificationType(data.get("type") or NotificationType.ANNOUNCEMENT.value),
            priority=Priority(data.get("priority") or Priority.NORMAL.value),
            created_at=str(data.get("createdAt", "")),
            read=bool(data.get("read", False)),
            read_at=data.get("readAt"),
        )
