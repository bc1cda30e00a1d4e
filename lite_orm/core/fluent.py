"""Chained query collector feeding `QueryHandler.find`."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, List, Optional, Tuple, Type, TypeVar

from .conditions import Conditions
from .models import DataclassModel

if TYPE_CHECKING:
    from .query_handler import QueryHandler

T = TypeVar("T", bound=DataclassModel)


@dataclass(frozen=True)
class FluentQuery(Generic[T]):
    """Immutable `select/where/order/limit` chain for one model.

    Every step returns a new query, so a partially built chain can be reused:

        adults = handler.query(User).where("age >= ?", 18)
        newest = adults.order("id desc").limit("5").find()
    """

    handler: "QueryHandler"
    model: Type[T]
    columns: Optional[Tuple[str, ...]] = None
    conditions: Optional[Conditions] = None
    order_by: Optional[str] = None
    limit_to: Optional[str] = None

    def select(self, *columns: str) -> "FluentQuery[T]":
        return replace(self, columns=tuple(columns) or None)

    def where(self, fragment: str, *arguments: Any) -> "FluentQuery[T]":
        """Set the filter; raises immediately if placeholders and arguments differ."""

        return replace(self, conditions=Conditions.of(fragment, *arguments))

    def order(self, order_by: str) -> "FluentQuery[T]":
        return replace(self, order_by=order_by)

    def limit(self, limit: str | int) -> "FluentQuery[T]":
        return replace(self, limit_to=str(limit))

    def find(self) -> List[T]:
        return self.handler.find(
            self.model,
            columns=self.columns,
            conditions=self.conditions,
            order_by=self.order_by,
            limit=self.limit_to,
        )

    def find_first(self) -> Optional[T]:
        """Run the query limited to one row and return it, or `None`."""

        rows = self.limit(1).find()
        return rows[0] if rows else None
