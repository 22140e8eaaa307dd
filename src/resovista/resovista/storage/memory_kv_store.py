from __future__ import annotations

import json
import threading
from typing import Any, Mapping, Optional, Sequence

from .kv_store import KVStore


def _copy(value: Mapping[str, Any]) -> dict:
    # Round-trip through JSON so stored values behave like the MySQL column.
    return json.loads(json.dumps(value))


class InMemoryKVStore(KVStore):
    """Process-local KV store used for development and tests."""

    def __init__(self, initial: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()
        if initial:
            self.mset(initial)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def get(self, key: str) -> Optional[dict]:
        with self._lock:
            raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Mapping[str, Any]) -> None:
        raw = json.dumps(_copy(value))
        with self._lock:
            self._data[key] = raw

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def mget(self, keys: Sequence[str]) -> list[Optional[dict]]:
        return [self.get(k) for k in keys]

    def mset(self, items: Mapping[str, Mapping[str, Any]]) -> None:
        for key, value in items.items():
            self.set(key, value)

    def mdelete(self, keys: Sequence[str]) -> None:
        for key in keys:
            self.delete(key)

    def get_by_prefix(self, prefix: str) -> list[dict]:
        with self._lock:
            raws = [self._data[k] for k in sorted(self._data) if k.startswith(prefix)]
        return [json.loads(raw) for raw in raws]

    def items_by_prefix(self, prefix: str) -> list[tuple[str, dict]]:
        with self._lock:
            items = [(k, self._data[k]) for k in sorted(self._data) if k.startswith(prefix)]
        return [(k, json.loads(raw)) for k, raw in items]
