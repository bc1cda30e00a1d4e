from __future__ import annotations

import sqlite3
import unittest

from lite_orm.core.errors import ExecutionError
from lite_orm.ports.db_api.database import Database
from lite_orm.ports.db_api.dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect


class _DummyCursor:
    def __init__(self, description=None):
        self.description = description


class _InvalidDialect(Dialect):
    paramstyle = "invalid"


class _NamedDialect(Dialect):
    paramstyle = "named"


class _DriverError(Exception):
    pass


class _FakeCursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=None):  # noqa: ANN001,ANN201
        self._conn.executed.append((sql, params))
        if "boom" in sql:
            raise _DriverError("syntax error")
        return None

    def fetchall(self):  # noqa: ANN201
        return [{"id": 1}]


class _FakeConn:
    Error = _DriverError

    def __init__(self) -> None:
        self.executed: list[tuple[str, object]] = []
        self.close_calls = 0

    def cursor(self) -> _FakeCursor:
        return _FakeCursor(self)

    def close(self) -> None:
        self.close_calls += 1


class DialectTests(unittest.TestCase):
    def test_quoting(self) -> None:
        self.assertEqual(SQLiteDialect().q("user"), '"user"')
        self.assertEqual(PostgresDialect().q("user"), '"user"')
        self.assertEqual(MySQLDialect().q("user"), "`user`")
        self.assertEqual(SQLiteDialect().q('we"ird'), '"we""ird"')

    def test_placeholders(self) -> None:
        self.assertEqual(Dialect().placeholder("x"), "?")
        self.assertEqual(SQLiteDialect().placeholder("x"), "?")
        self.assertEqual(PostgresDialect().placeholder("x"), "%s")
        self.assertEqual(MySQLDialect().placeholder("x"), "%s")
        with self.assertRaises(ValueError):
            _InvalidDialect().placeholder("x")
        with self.assertRaises(ValueError):
            _NamedDialect().placeholder("x")


class DatabaseAdapterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.conn = sqlite3.connect(":memory:")
        self.conn.execute("CREATE TABLE item (id INTEGER PRIMARY KEY, label TEXT)")
        self.conn.executemany(
            "INSERT INTO item (id, label) VALUES (?, ?)", [(1, "a"), (2, "b")]
        )
        self.db = Database(self.conn, SQLiteDialect())

    def tearDown(self) -> None:
        self.conn.close()

    def test_fetchall_maps_tuple_rows(self) -> None:
        rows = self.db.fetchall("SELECT id, label FROM item ORDER BY id;")
        self.assertEqual(rows, [{"id": 1, "label": "a"}, {"id": 2, "label": "b"}])

    def test_fetchone(self) -> None:
        self.assertEqual(
            self.db.fetchone("SELECT label FROM item WHERE id = ?;", [2]),
            {"label": "b"},
        )
        self.assertIsNone(self.db.fetchone("SELECT label FROM item WHERE id = ?;", [9]))

    def test_sqlite_row_factory(self) -> None:
        self.conn.row_factory = sqlite3.Row
        rows = self.db.fetchall("SELECT id FROM item ORDER BY id;")
        self.assertEqual(rows, [{"id": 1}, {"id": 2}])

    def test_driver_error_is_wrapped(self) -> None:
        with self.assertRaises(ExecutionError) as ctx:
            self.db.fetchall("SELECT * FROM missing_table;")
        self.assertIsInstance(ctx.exception.__cause__, sqlite3.OperationalError)
        self.assertIn("missing_table", str(ctx.exception))

    def test_row_to_mapping_errors(self) -> None:
        with self.assertRaises(TypeError):
            self.db._row_to_mapping(_DummyCursor(), (1,))
        with self.assertRaises(TypeError):
            self.db._row_to_mapping(_DummyCursor(), 123)

    def test_closed_connection(self) -> None:
        conn = sqlite3.connect(":memory:")
        db = Database(conn, SQLiteDialect())
        db.close()
        db.close()
        with self.assertRaises(RuntimeError):
            db.fetchall("SELECT 1;")

    def test_context_manager_closes(self) -> None:
        conn = _FakeConn()
        with Database(conn, SQLiteDialect()) as db:
            self.assertEqual(db.fetchall("SELECT 1;"), [{"id": 1}])
        self.assertEqual(conn.close_calls, 1)

    def test_connection_error_class_is_used(self) -> None:
        conn = _FakeConn()
        db = Database(conn, PostgresDialect())
        with self.assertRaises(ExecutionError) as ctx:
            db.execute("boom", ["x"])
        self.assertIsInstance(ctx.exception.__cause__, _DriverError)
        self.assertEqual(conn.executed, [("boom", ["x"])])

    def test_non_driver_errors_are_not_wrapped(self) -> None:
        conn = _FakeConn()

        def broken_cursor():  # noqa: ANN202
            raise KeyError("not a driver error")

        conn.cursor = broken_cursor  # type: ignore[method-assign]
        db = Database(conn, SQLiteDialect())
        with self.assertRaises(KeyError):
            db.execute("SELECT 1;")


if __name__ == "__main__":
    unittest.main()
