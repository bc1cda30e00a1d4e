"""SQL execution boundary backed by a `DatabasePort` implementation."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Type

from .contracts import DatabasePort
from .metadata import get_model_metadata
from .models import DataclassModel
from .query_builder import ALL_ROWS, Clause, compile_select
from .types import RowMapping

logger = logging.getLogger(__name__)


class SqlQueryExecutor:
    """Runs single-table SELECT statements through a DB-API adapter.

    The executor resolves the model's table, compiles the statement for the
    adapter's dialect, and returns the rows as mappings. It holds no cursor or
    transaction between calls.
    """

    def __init__(self, db: DatabasePort):
        """Create an executor.

        Args:
            db: Database adapter implementing `DatabasePort`.
        """

        self.db = db
        self.d = db.dialect

    def query(
        self,
        model: Type[DataclassModel],
        columns: Optional[Sequence[str]] = None,
        where: Optional[str] = None,
        where_args: Optional[Sequence[Any]] = None,
        group_by: Optional[str] = None,
        having: Optional[str] = None,
        order_by: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> List[RowMapping]:
        """Select rows of `model`'s table.

        Raises:
            PlaceholderArgumentMismatch: If `where_args` does not match the
                placeholders in `where`.
            ValueError: If `limit` or `having` is malformed.
            ExecutionError: If the engine rejects or fails the statement.
        """

        meta = get_model_metadata(model)
        clause = ALL_ROWS if where is None else Clause(where, tuple(where_args or ()))

        compiled = compile_select(
            meta.table,
            columns,
            clause,
            dialect=self.d,
            group_by=group_by,
            having=having,
            order_by=order_by,
            limit=limit,
        )
        logger.debug("SELECT on %s: %s params=%r", meta.table, compiled.sql, compiled.params)
        return self.db.fetchall(compiled.sql, compiled.params)
