from __future__ import annotations

from typing import Optional, Sequence

from ..storage.kv_store import KVStore
from .model import Todo
from .repository import TodoRepository


class KVTodoRepository(TodoRepository):
    """Todos keyed ``todo:{userId}:{millis}``; the key doubles as the id."""

    def __init__(self, kv: KVStore):
        self._kv = kv

    def save(self, todo: Todo) -> None:
        self._kv.set(todo.id, todo.to_dict())

    def get(self, todo_id: str) -> Optional[Todo]:
        if not todo_id.startswith("todo:"):
            return None
        data = self._kv.get(todo_id)
        return Todo.from_dict(data) if data else None

    def delete(self, todo_id: str) -> None:
        self._kv.delete(todo_id)

    def list_for_user(self, user_id: str) -> Sequence[Todo]:
        return [Todo.from_dict(d) for d in self._kv.get_by_prefix(f"todo:{user_id}:")]
