from __future__ import annotations

from typing import Sequence

from ..storage.kv_store import KVStore
from .model import ChatMessage
from .repository import ChatRepository


class KVChatRepository(ChatRepository):
    """Each message is stored once under its id plus one copy per participant.

    Participant copies live at ``chat:{owner}:{other}:{messageId}`` so either side
    reads its conversation with one prefix scan.
    """

    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, message: ChatMessage) -> None:
        data = message.to_dict()
        self._kv.mset(
            {
                message.id: data,
                f"chat:{message.sender_id}:{message.recipient_id}:{message.id}": data,
                f"chat:{message.recipient_id}:{message.sender_id}:{message.id}": data,
            }
        )

    def list_conversation(self, owner_id: str, other_id: str) -> Sequence[ChatMessage]:
        return [ChatMessage.from_dict(d) for d in self._kv.get_by_prefix(f"chat:{owner_id}:{other_id}:")]
