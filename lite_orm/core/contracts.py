"""Core port contracts used by adapters, executor, and query handler."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence, Type, TypeVar

from .models import DataclassModel
from .types import MaybeRow, QueryParams, RowMapping

T = TypeVar("T", bound=DataclassModel)


class DialectPort(Protocol):
    """Dialect behavior required by query compilation."""

    paramstyle: str

    def q(self, ident: str) -> str: ...

    def placeholder(self, key: str) -> str: ...


class DatabasePort(Protocol):
    """Database adapter behavior required by the SQL executor."""

    dialect: DialectPort

    def execute(self, sql: str, params: QueryParams = None) -> Any: ...

    def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow: ...

    def fetchall(self, sql: str, params: QueryParams = None) -> List[RowMapping]: ...


class QueryExecutorPort(Protocol):
    """Execution boundary: turns a clause plus projection into raw rows.

    `where_args` must hold one value per `?` in `where`. A `None` `where`
    means no filter. `order_by` and `limit` are opaque strings forwarded
    verbatim; no `order_by` means store-defined order.
    """

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
    ) -> List[RowMapping]: ...


class MaterializerPort(Protocol):
    """Materialization boundary: builds one typed object from one raw row."""

    def __call__(self, model: Type[T], row: RowMapping) -> T: ...
