from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..common.validators import require_bool, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import CurrentUser
from .model import Todo
from .repository import TodoRepository

_READ_ONLY = frozenset({"id", "userId", "createdAt", "updatedAt"})


class TodoService:
    """Personal todo list; every operation is scoped to the owner."""

    def __init__(self, todos: TodoRepository, *, clock: Clock = now_utc):
        self._todos = todos
        self._clock = clock

    def create(self, user: CurrentUser, data: Mapping[str, Any]) -> Todo:
        if not isinstance(data, Mapping):
            raise ValidationError("Todo must be a JSON object")

        now = self._clock()
        todo = Todo(
            id=f"todo:{user.id}:{to_millis(now)}",
            user_id=user.id,
            title=require_non_empty(data.get("title"), "title"),
            created_at=to_iso(now),
            completed=require_bool(data.get("completed", False), "completed"),
            extra={k: v for k, v in data.items() if k not in _READ_ONLY and k not in ("title", "completed")},
        )
        self._todos.save(todo)
        return todo

    def list_for(self, user: CurrentUser) -> Sequence[Todo]:
        return self._todos.list_for_user(user.id)

    def _owned(self, user: CurrentUser, todo_id: str) -> Todo:
        todo = self._todos.get(todo_id)
        if not todo or todo.user_id != user.id:
            raise NotFoundError("Not found or unauthorized")
        return todo

    def update(self, user: CurrentUser, todo_id: str, updates: Mapping[str, Any]) -> Todo:
        if not isinstance(updates, Mapping):
            raise ValidationError("Todo updates must be a JSON object")
        existing = self._owned(user, todo_id)

        merged = existing.to_dict()
        merged.update({k: v for k, v in updates.items() if k not in _READ_ONLY})
        if "title" in updates:
            merged["title"] = require_non_empty(updates.get("title"), "title")
        if "completed" in updates:
            require_bool(updates["completed"], "completed")
        merged["updatedAt"] = to_iso(self._clock())

        todo = Todo.from_dict(merged)
        self._todos.save(todo)
        return todo

    def delete(self, user: CurrentUser, todo_id: str) -> None:
        self._owned(user, todo_id)
        self._todos.delete(todo_id)
