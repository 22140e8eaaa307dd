from __future__ import annotations

from typing import Optional, Sequence

from ..storage.kv_store import KVStore
from .model import Notification
from .repository import NotificationRepository


class KVNotificationRepository(NotificationRepository):
    """Notifications keyed ``notification:{recipientId}:{millis}`` (the id)."""

    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, notification: Notification) -> None:
        self._kv.set(notification.id, notification.to_dict())

    def get(self, notification_id: str) -> Optional[Notification]:
        if not notification_id.startswith("notification:"):
            return None
        data = self._kv.get(notification_id)
        return Notification.from_dict(data) if data else None

    def list_for_recipient(self, recipient_id: str) -> Sequence[Notification]:
        return [Notification.from_dict(d) for d in self._kv.get_by_prefix(f"notification:{recipient_id}:")]
