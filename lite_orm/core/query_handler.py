"""Find operations over dataclass models.

`QueryHandler` is the entry point for reads. Each operation turns one query
shape into a clause, issues one request through the execution boundary and
maps the rows back to model instances. A missing row is never an error:
single-row finds return `None` and list finds return `[]`.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Type, TypeVar

from .conditions import Conditions, validate_conditions
from .contracts import MaterializerPort, QueryExecutorPort
from .fluent import FluentQuery
from .metadata import get_model_metadata
from .models import DataclassModel, require_dataclass_model, row_to_model
from .query_builder import ALL_ROWS, Clause, clause_for_id, clause_for_ids, clause_from_conditions
from .types import ConditionArray

T = TypeVar("T", bound=DataclassModel)

logger = logging.getLogger(__name__)


class QueryHandler:
    """Read-only query orchestration for any registered model type."""

    def __init__(
        self,
        executor: QueryExecutorPort,
        materializer: MaterializerPort = row_to_model,
    ):
        """Create a query handler.

        Args:
            executor: Execution boundary that returns raw rows.
            materializer: Callable mapping `(model, row)` to an instance.
                Defaults to `row_to_model`.
        """

        self.executor = executor
        self.materializer = materializer

    def find_by_id(self, model: Type[T], id_value: Any) -> Optional[T]:
        """Fetch at most one row by primary key, or `None` when it does not exist."""

        pk = self._pk(model)
        logger.debug("find_by_id %s %s=%r", model.__name__, pk, id_value)
        rows = self._run(model, clause_for_id(id_value, pk), limit="1")
        return rows[0] if rows else None

    def find_first(self, model: Type[T]) -> Optional[T]:
        """Fetch the row with the lowest primary key, or `None` if empty."""

        pk = self._pk(model)
        rows = self._run(model, ALL_ROWS, order_by=pk, limit="1")
        return rows[0] if rows else None

    def find_last(self, model: Type[T]) -> Optional[T]:
        """Fetch the row with the highest primary key, or `None` if empty."""

        pk = self._pk(model)
        rows = self._run(model, ALL_ROWS, order_by=f"{pk} desc", limit="1")
        return rows[0] if rows else None

    def find_all(self, model: Type[T], *ids: Any) -> List[T]:
        """Fetch rows by primary key, ordered by primary key.

        Calling with no ids returns every row of the table, not an empty
        list. Pass `AllRows()`/`SpecificIds(...)` to `clause_for_ids` directly
        when that distinction has to be explicit at the call site.
        """

        pk = self._pk(model)
        logger.debug("find_all %s ids=%r", model.__name__, ids)
        return self._run(model, clause_for_ids(ids, pk), order_by=pk)

    def find(
        self,
        model: Type[T],
        columns: Optional[Sequence[str]] = None,
        conditions: ConditionArray | Conditions = None,
        order_by: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> List[T]:
        """Fetch rows matching arbitrary conditions.

        Args:
            model: Dataclass model type to query.
            columns: Columns to project, or `None` for every column.
            conditions: `Conditions`, a flat `[fragment, *args]` array, or
                `None` for no filter.
            order_by: Raw `ORDER BY` body, forwarded verbatim.
            limit: Raw `LIMIT` body, forwarded verbatim.

        Returns:
            List of mapped model instances, possibly empty.

        Raises:
            MalformedConditions: If `conditions` is empty or has no fragment.
            PlaceholderArgumentMismatch: If placeholders and arguments differ.
        """

        require_dataclass_model(model)
        if not isinstance(conditions, Conditions):
            validate_conditions(conditions)
        clause = clause_from_conditions(conditions)
        return self._run(
            model,
            clause,
            columns=columns,
            order_by=order_by,
            limit=limit,
        )

    def query(self, model: Type[T]) -> FluentQuery[T]:
        """Start a chained query: `handler.query(User).where(...).find()`."""

        return FluentQuery(self, model)

    def _pk(self, model: Type[T]) -> str:
        return get_model_metadata(model).pk

    def _run(
        self,
        model: Type[T],
        clause: Clause,
        *,
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> List[T]:
        rows = self.executor.query(
            model,
            columns=columns,
            where=clause.where,
            where_args=list(clause.args) if not clause.is_all_rows else None,
            group_by=None,
            having=None,
            order_by=order_by,
            limit=limit,
        )
        return [self.materializer(model, row) for row in rows]
