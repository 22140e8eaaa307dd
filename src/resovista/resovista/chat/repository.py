from __future__ import annotations

from typing import Protocol, Sequence

from .model import ChatMessage


class ChatRepository(Protocol):
    def save(self, message: ChatMessage) -> None:
        raise NotImplementedError

    def list_conversation(self, owner_id: str, other_id: str) -> Sequence[ChatMessage]:
        raise NotImplementedError
