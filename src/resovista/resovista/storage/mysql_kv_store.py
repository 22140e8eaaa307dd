from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, escape_like, fetchall, fetchone
from .kv_store import KVStore


def _decode(value: Any) -> dict:
    # mysql-connector returns JSON columns as str (pure) or bytes (C ext).
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    return dict(value)


class MySQLKVStore(KVStore):
    def __init__(self, conn_factory: DatabaseConnection, *, table: str = "kv_store"):
        self._conn_factory = conn_factory
        self._table = table

    def get(self, key: str) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT v FROM {self._table} WHERE k=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            return _decode(row["v"])

    def set(self, key: str, value: Mapping[str, Any]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {self._table} (k, v) VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                (key, json.dumps(value)),
            )

    def delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE k=%s", (key,))

    def mget(self, keys: Sequence[str]) -> list[Optional[dict]]:
        if not keys:
            return []
        placeholders = ", ".join(["%s"] * len(keys))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT k, v FROM {self._table} WHERE k IN ({placeholders})", tuple(keys))
            found = {row["k"]: _decode(row["v"]) for row in fetchall(cur)}
        return [found.get(k) for k in keys]

    def mset(self, items: Mapping[str, Mapping[str, Any]]) -> None:
        if not items:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"""
                INSERT INTO {self._table} (k, v) VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                [(k, json.dumps(v)) for k, v in items.items()],
            )

    def mdelete(self, keys: Sequence[str]) -> None:
        if not keys:
            return
        placeholders = ", ".join(["%s"] * len(keys))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE k IN ({placeholders})", tuple(keys))

    def get_by_prefix(self, prefix: str) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT v FROM {self._table} WHERE k LIKE %s ORDER BY k",
                (escape_like(prefix) + "%",),
            )
            return [_decode(row["v"]) for row in fetchall(cur)]

    def items_by_prefix(self, prefix: str) -> list[tuple[str, dict]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT k, v FROM {self._table} WHERE k LIKE %s ORDER BY k",
                (escape_like(prefix) + "%",),
            )
            return [(row["k"], _decode(row["v"])) for row in fetchall(cur)]
