"""DB-API adapter implementation for the core database port."""

from __future__ import annotations

import sys
from typing import Any, Mapping, Tuple, Type

from ...core.errors import ExecutionError
from ...core.types import MaybeRow, QueryParams, RowMapping, Rows
from .dialects import Dialect


class Database:
    """Thin DB-API wrapper that normalizes execute, errors, and row mapping.

    The adapter does not open, pool, or commit connections; the caller owns
    the connection lifecycle. Driver errors raised while executing are
    re-raised as `ExecutionError` with the driver exception as the cause.
    """

    def __init__(self, conn: Any, dialect: Dialect):
        """Create database adapter.

        Args:
            conn: DB-API connection object.
            dialect: Concrete SQL dialect instance.
        """

        self._closed = False
        self.conn: Any | None = conn
        self.dialect = dialect
        self._driver_errors = _driver_errors(conn)

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def execute(self, sql: str, params: QueryParams = None) -> Any:
        """Execute SQL with optional parameters and return cursor."""

        conn = self._require_open_connection()
        try:
            cur = conn.cursor()
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, params)
        except self._driver_errors as exc:
            raise ExecutionError(f"{type(exc).__name__}: {exc} [sql: {sql}]") from exc
        return cur

    def _row_to_mapping(self, cursor: Any, row: Any) -> RowMapping:
        """Normalize row object to mapping.

        Supports mapping rows directly and tuple/list rows via
        `cursor.description`.
        """

        if isinstance(row, Mapping):
            return row

        if isinstance(row, (tuple, list)):
            desc = getattr(cursor, "description", None)
            if not desc:
                raise TypeError(
                    "Cursor has no description; cannot map tuple rows to dict."
                )
            cols = [d[0] for d in desc]
            return dict(zip(cols, row))

        keys = getattr(row, "keys", None)
        if callable(keys):
            return {key: row[key] for key in keys()}

        raise TypeError(f"Unsupported row type: {type(row)}")

    def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow:
        """Execute query and return one normalized row mapping."""

        cur = self.execute(sql, params)
        try:
            row = cur.fetchone()
        except self._driver_errors as exc:
            raise ExecutionError(f"{type(exc).__name__}: {exc}") from exc
        if row is None:
            return None
        return self._row_to_mapping(cur, row)

    def fetchall(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute query and return all rows as normalized mappings."""

        cur = self.execute(sql, params)
        try:
            rows = cur.fetchall()
        except self._driver_errors as exc:
            raise ExecutionError(f"{type(exc).__name__}: {exc}") from exc
        return [self._row_to_mapping(cur, r) for r in rows]

    def close(self) -> None:
        """Close the underlying connection once."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _driver_errors(conn: Any) -> Tuple[Type[BaseException], ...]:
    """Resolve the DB-API `Error` base class for a connection's driver.

    PEP 249 drivers expose it on the connection (optional extension) or on
    the driver module; unknown drivers fall back to `Exception`.
    """

    error = getattr(conn, "Error", None)
    if isinstance(error, type) and issubclass(error, BaseException):
        return (error,)

    root_module = type(conn).__module__.split(".")[0]
    module = sys.modules.get(root_module)
    error = getattr(module, "Error", None)
    if isinstance(error, type) and issubclass(error, BaseException):
        return (error,)
    return (Exception,)
