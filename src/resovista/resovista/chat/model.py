from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class ChatMessage:
    id: str
    sender_id: str
    recipient_id: str
    message: str
    type: str
    timestamp: str
    read: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "senderId": self.sender_id,
            "recipientId": self.recipient_id,
            "message": self.message,
            "type": self.type,
            "timestamp": self.timestamp,
            "read": self.read,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        return cls(
            id=str(data["id"]),
            sender_id=str(data["senderId"]),
            recipient_id=str(data["recipientId"]),
            message=str(data.get("message", "")),
            type=str(data.get("type") or "text"),
            timestamp=str(data.get("timestamp", "")),
            read=bool(data.get("read", False)),
        )
