import json

import pytest

from src.resovista.resovista.database.mysql_base import escape_like
from src.resovista.resovista.storage.mysql_kv_store import MySQLKVStore


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.closed = False

    def execute(self, sql, params=None):
        self._conn.statements.append((" ".join(sql.split()), params))

    def executemany(self, sql, seq):
        self._conn.statements.append((" ".join(sql.split()), list(seq)))

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, rows):
        self.rows = rows
        self.statements = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        assert dictionary is True
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    """Hands out recording connections; ``rows`` is what every SELECT returns."""

    def __init__(self, rows=None):
        self.rows = rows or []
        self.connections = []

    def connect(self):
        conn = FakeConnection(self.rows)
        self.connections.append(conn)
        return conn

    @property
    def statements(self):
        return [s for conn in self.connections for s in conn.statements]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("a_%", "a\\_\\%"),
        ("back\\slash", "back\\\\slash"),
        ("attendance:c1:", "attendance:c1:"),
    ],
)
def test_escape_like(value, expected):
    assert escape_like(value) == expected


def test_get_by_prefix_matches_wildcards_literally():
    factory = FakeConnectionFactory(rows=[{"v": json.dumps({"n": 1})}, {"v": b'{"n": 2}'}])
    kv = MySQLKVStore(factory)

    assert kv.get_by_prefix("a_%") == [{"n": 1}, {"n": 2}]
    sql, params = factory.statements[0]
    assert sql == "SELECT v FROM kv_store WHERE k LIKE %s ORDER BY k"
    assert params == ("a\\_\\%%",)


def test_items_by_prefix_returns_keys():
    factory = FakeConnectionFactory(rows=[{"k": "todo:u1:1", "v": '{"title": "a"}'}])
    kv = MySQLKVStore(factory, table="records")

    assert kv.items_by_prefix("todo:u1:") == [("todo:u1:1", {"title": "a"})]
    sql, params = factory.statements[0]
    assert sql == "SELECT k, v FROM records WHERE k LIKE %s ORDER BY k"
    assert params == ("todo:u1:%",)


def test_set_upserts_json_and_commits():
    factory = FakeConnectionFactory()
    MySQLKVStore(factory).set("k1", {"a": [1, 2]})

    sql, params = factory.statements[0]
    assert sql == "INSERT INTO kv_store (k, v) VALUES (%s, %s) ON DUPLICATE KEY UPDATE v=VALUES(v)"
    assert params[0] == "k1"
    assert json.loads(params[1]) == {"a": [1, 2]}
    conn = factory.connections[0]
    assert conn.committed and conn.closed


def test_get_missing_key_returns_none():
    factory = FakeConnectionFactory()
    assert MySQLKVStore(factory).get("nope") is None
    assert factory.statements == [("SELECT v FROM kv_store WHERE k=%s", ("nope",))]


def test_mget_keeps_key_order_and_fills_gaps():
    factory = FakeConnectionFactory(rows=[{"k": "b", "v": '{"x": 2}'}])
    assert MySQLKVStore(factory).mget(["a", "b"]) == [None, {"x": 2}]

    sql, params = factory.statements[0]
    assert sql == "SELECT k, v FROM kv_store WHERE k IN (%s, %s)"
    assert params == ("a", "b")


def test_mset_uses_executemany():
    factory = FakeConnectionFactory()
    MySQLKVStore(factory).mset({"a": {"n": 1}, "b": {"n": 2}})

    _, rows = factory.statements[0]
    assert [(k, json.loads(v)) for k, v in rows] == [("a", {"n": 1}), ("b", {"n": 2})]


def test_empty_batches_never_connect():
    factory = FakeConnectionFactory()
    kv = MySQLKVStore(factory)

    assert kv.mget([]) == []
    kv.mset({})
    kv.mdelete([])
    assert factory.connections == []


def test_failed_statement_rolls_back():
    class BrokenCursor(FakeCursor):
        def execute(self, sql, params=None):
            raise RuntimeError("connection lost")

    factory = FakeConnectionFactory()
    factory.connect = lambda: _broken_connection(factory, BrokenCursor)

    with pytest.raises(RuntimeError):
        MySQLKVStore(factory).delete("k")
    conn = factory.connections[0]
    assert conn.rolled_back and conn.closed and not conn.committed


def _broken_connection(factory, cursor_cls):
    conn = FakeConnection(factory.rows)
    conn.cursor = lambda dictionary=False: cursor_cls(conn)
    factory.connections.append(conn)
    return conn
