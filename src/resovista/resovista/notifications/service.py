from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..common.permissions import ensure_role
from ..common.validators import is_blank, require_enum, require_fields, require_key_part, require_non_empty
from ..core.enums import STAFF_ROLES, BroadcastTarget, NotificationType, Priority, Role
from ..core.exceptions import NotFoundError
from ..users.model import CurrentUser
from ..users.repository import ProfileRepository
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

_TARGET_ROLES = {
    BroadcastTarget.ALL: None,
    BroadcastTarget.STUDENTS: Role.STUDENT,
    BroadcastTarget.TEACHERS: Role.TEACHER,
    BroadcastTarget.ADMINS: Role.ADMIN,
}


class NotificationService:
    """Per-recipient notifications; the read flag is changed by the recipient only."""

    def __init__(
        self,
        notifications: NotificationRepository,
        profiles: ProfileRepository,
        *,
        clock: Clock = now_utc,
    ):
        self._notifications = notifications
        self._profiles = profiles
        self._clock = clock

    def notify(
        self,
        *,
        sender_id: str,
        recipient_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.ANNOUNCEMENT,
        priority: Priority = Priority.NORMAL,
    ) -> Notification:
        now = self._clock()
        notification = Notification(
            id=f"notification:{recipient_id}:{to_millis(now)}",
            recipient_id=recipient_id,
            sender_id=sender_id,
            title=title,
            message=message,
            type=type,
            priority=priority,
            created_at=to_iso(now),
        )
        self._notifications.save(notification)
        return notification

    def _parse_kind(self, type: Any, priority: Any) -> tuple[NotificationType, Priority]:
        kind = NotificationType.ANNOUNCEMENT if is_blank(type) else require_enum(type, NotificationType, "type")
        level = Priority.NORMAL if is_blank(priority) else require_enum(priority, Priority, "priority")
        return kind, level

    def send(
        self,
        sender: CurrentUser,
        *,
        recipient_id: Any,
        title: Any,
        message: Any,
        type: Any = None,
        priority: Any = None,
    ) -> Notification:
        require_fields(
            {"recipientId": recipient_id, "title": title, "message": message},
            "recipientId", "title", "message",
        )
        kind, level = self._parse_kind(type, priority)
        return self.notify(
            sender_id=sender.id,
            recipient_id=require_key_part(recipient_id, "recipientId"),
            title=require_non_empty(title, "title"),
            message=require_non_empty(message, "message"),
            type=kind,
            priority=level,
        )

    def broadcast(
        self,
        sender: CurrentUser,
        *,
        target: Any,
        title: Any,
        message: Any,
        type: Any = None,
        priority: Any = None,
    ) -> list[Notification]:
        ensure_role(sender, STAFF_ROLES, "Only teachers or admins can broadcast")
        audience = BroadcastTarget.ALL if is_blank(target) else require_enum(target, BroadcastTarget, "target")
        title = require_non_empty(title, "title")
        message = require_non_empty(message, "message")
        kind, level = self._parse_kind(type, priority)

        role = _TARGET_ROLES[audience]
        sent = []
        for profile in self._profiles.list_all():
            if profile.id == sender.id or (role is not None and profile.role != role):
                continue
            sent.append(
                self.notify(
                    sender_id=sender.id,
                    recipient_id=profile.id,
                    title=title,
                    message=message,
                    type=kind,
                    priority=level,
                )
            )
        logger.info("Broadcast %r to %s: %d recipients", title, audience.value, len(sent))
        return sent

    def list_for(self, user: CurrentUser) -> Sequence[Notification]:
        items = list(self._notifications.list_for_recipient(user.id))
        items.sort(key=lambda n: n.created_at, reverse=True)
        return items

    def unread_count(self, user: CurrentUser) -> int:
        return sum(1 for n in self._notifications.list_for_recipient(user.id) if not n.read)

    def mark_read(self, user: CurrentUser, notification_id: str) -> Notification:
        notification: Optional[Notification] = self._notifications.get(notification_id)
        if not notification or notification.recipient_id != user.id:
            raise NotFoundError("Not found or unauthorized")

        notification = replace(notification, read=True, read_at=to_iso(self._clock()))
        self._notifications.save(notification)
        return notification

    def mark_all_read(self, user: CurrentUser) -> int:
        read_at = to_iso(self._clock())
        count = 0
        for n in self._notifications.list_for_recipient(user.id):
            if n.read:
                continue
            self._notifications.save(replace(n, read=True, read_at=read_at))
            count += 1
        return count
