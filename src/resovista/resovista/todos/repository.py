from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Todo


class TodoRepository(Protocol):
    def save(self, todo: Todo) -> None:
        raise NotImplementedError

    def get(self, todo_id: str) -> Optional[Todo]:
        raise NotImplementedError

    def delete(self, todo_id: str) -> None:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Todo]:
        raise NotImplementedError
