from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def save(self, notification: Notification) -> None:
        raise NotImplementedError

    def get(self, notification_id: str) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_recipient(self, recipient_id: str) -> Sequence[Notification]:
        raise NotImplementedError
