from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence


class KVStore(Protocol):
    """Flat key -> JSON object store.

    Every write is an unconditional overwrite; only single-key operations are
    atomic. ``get_by_prefix`` returns values ordered by key.
    """

    def get(self, key: str) -> Optional[dict]:
        raise NotImplementedError

    def set(self, key: str, value: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def mget(self, keys: Sequence[str]) -> list[Optional[dict]]:
        raise NotImplementedError

    def mset(self, items: Mapping[str, Mapping[str, Any]]) -> None:
        raise NotImplementedError

    def mdelete(self, keys: Sequence[str]) -> None:
        raise NotImplementedError

    def get_by_prefix(self, prefix: str) -> list[dict]:
        raise NotImplementedError

    def items_by_prefix(self, prefix: str) -> list[tuple[str, dict]]:
        """``(key, value)`` pairs ordered by key; used for exports."""
        raise NotImplementedError
