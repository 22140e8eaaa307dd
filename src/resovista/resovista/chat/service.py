from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..common.validators import require_fields, require_key_part
from ..core.exceptions import ValidationError
from ..users.model import CurrentUser
from .model import ChatMessage
from .repository import ChatRepository

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, messages: ChatRepository, *, clock: Clock = now_utc):
        self._messages = messages
        self._clock = clock

    def send(self, sender: CurrentUser, *, recipient_id: Any, message: Any, type: Optional[str] = None) -> ChatMessage:
        require_fields({"recipientId": recipient_id, "message": message}, "recipientId", "message",
                       message="recipientId and message are required")
        if not isinstance(message, str):
            raise ValidationError("message must be a string")
        if type is not None and not isinstance(type, str):
            raise ValidationError("type must be a string")

        now = self._clock()
        chat_message = ChatMessage(
            id=f"message:{to_millis(now)}",
            sender_id=sender.id,
            recipient_id=require_key_part(recipient_id, "recipientId"),
            message=message,
            type=type or "text",
            timestamp=to_iso(now),
        )
        self._messages.save(chat_message)
        logger.debug("Message %s from %s to %s", chat_message.id, sender.id, chat_message.recipient_id)
        return chat_message

    def conversation(self, user: CurrentUser, other_user_id: str) -> Sequence[ChatMessage]:
        """Messages exchanged with ``other_user_id``, oldest first."""
        messages = self._messages.list_conversation(user.id, require_key_part(other_user_id, "otherUserId"))
        return sorted(messages, key=lambda m: (m.timestamp, m.id))
