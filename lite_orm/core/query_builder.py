"""WHERE-clause builders and SELECT compilation.

The clause builders are pure: they turn one query shape into a `Clause`
(fragment plus bind arguments) and never touch the database. Caller values
only ever travel in `Clause.args`; fragments hold `?` placeholders.
`compile_select` is used by the SQL executor to assemble the final statement
for a concrete dialect.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from .conditions import (
    PLACEHOLDER,
    AllRows,
    Conditions,
    IdSelection,
    SpecificIds,
    count_placeholders,
    select_ids,
)
from .contracts import DialectPort
from .errors import PlaceholderArgumentMismatch
from .types import ConditionArray, QueryParams

_LIMIT_PATTERN = re.compile(r"\s*\d+\s*(,\s*\d+\s*)?")


@dataclass(frozen=True)
class Clause:
    """A WHERE fragment and its positional bind arguments.

    `where=None` means no WHERE filter at all; see `ALL_ROWS`.
    """

    where: Optional[str]
    args: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        placeholders = count_placeholders(self.where) if self.where is not None else 0
        if placeholders != len(self.args):
            raise PlaceholderArgumentMismatch(
                self.where or "", placeholders, len(self.args)
            )

    @property
    def is_all_rows(self) -> bool:
        """Whether this clause applies no filter."""

        return self.where is None


ALL_ROWS = Clause(None, ())


@dataclass(frozen=True)
class CompiledQuery:
    """A complete SQL statement with parameters in the dialect's param style."""

    sql: str
    params: QueryParams


def clause_for_id(id_value: Any, pk: str = "id") -> Clause:
    """Build `<pk> = ?` for one primary-key value."""

    return Clause(f"{pk} = {PLACEHOLDER}", (id_value,))


def clause_for_ids(ids: Sequence[Any] | IdSelection, pk: str = "id") -> Clause:
    """Build an OR-chain of primary-key equality tests.

    Note:
        An empty id list yields `ALL_ROWS` (no filter), not a clause that
        matches nothing.

    Example:
        `clause_for_ids([5, 7, 9])` gives `"id = ? or id = ? or id = ?"` with
        args `(5, 7, 9)`.
    """

    selection = ids if isinstance(ids, (AllRows, SpecificIds)) else select_ids(ids)
    if isinstance(selection, AllRows):
        return ALL_ROWS

    where = " or ".join(f"{pk} = {PLACEHOLDER}" for _ in selection.ids)
    return Clause(where, selection.ids)


def clause_from_conditions(conditions: ConditionArray | Conditions) -> Clause:
    """Split validated conditions into a clause.

    The arguments are passed on unchanged and the fragment only loses
    surrounding whitespace; no escaping is done here because caller values
    are carried by placeholders.
    """

    if conditions is None:
        return ALL_ROWS
    if isinstance(conditions, Conditions):
        return Clause(conditions.fragment, conditions.arguments)
    return Clause(conditions[0].strip(), tuple(conditions[1:]))


def compile_select(
    table: str,
    columns: Optional[Sequence[str]],
    clause: Clause,
    *,
    dialect: DialectPort,
    group_by: Optional[str] = None,
    having: Optional[str] = None,
    order_by: Optional[str] = None,
    limit: Optional[str] = None,
) -> CompiledQuery:
    """Compile a SELECT statement for one table.

    Args:
        table: Unquoted table name.
        columns: Column names to project, or `None` for all columns.
        clause: WHERE clause with `?` placeholders.
        dialect: SQL dialect used for identifier quoting and placeholders.
        group_by: Raw `GROUP BY` body, appended verbatim.
        having: Raw `HAVING` body, appended verbatim. Requires `group_by`.
        order_by: Raw `ORDER BY` body, appended verbatim.
        limit: `"<n>"` or `"<offset>,<n>"`, appended verbatim.

    Returns:
        Compiled SQL and parameters.

    Raises:
        ValueError: If `having` is set without `group_by`, or `limit` is not
            a valid limit expression.
    """

    if having and not group_by:
        raise ValueError("HAVING clauses are only permitted when using a GROUP BY clause.")
    if limit and not _LIMIT_PATTERN.fullmatch(limit):
        raise ValueError(f"Invalid LIMIT clause: {limit!r}")

    if columns:
        projection = ", ".join(dialect.q(name) for name in columns)
    else:
        projection = "*"

    sql = f"SELECT {projection} FROM {dialect.q(table)}"
    params: QueryParams = None

    if clause.where:
        where, params = bind_placeholders(clause, dialect)
        sql += f" WHERE {where}"
    if group_by:
        sql += f" GROUP BY {group_by}"
    if having:
        sql += f" HAVING {having}"
    if order_by:
        sql += f" ORDER BY {order_by}"
    if limit:
        sql += f" LIMIT {limit.strip()}"

    return CompiledQuery(sql + ";", params)


def bind_placeholders(clause: Clause, dialect: DialectPort) -> Tuple[str, QueryParams]:
    """Rewrite `?` placeholders into the dialect's param style.

    Both supported styles, `qmark` and `format`, bind positionally, so the
    arguments come back as a list in placeholder order. Any other style is
    rejected by `DialectPort.placeholder`.
    """

    where = clause.where or ""
    if dialect.paramstyle == "qmark":
        return where, list(clause.args)

    marker = dialect.placeholder("arg")
    return marker.join(where.split(PLACEHOLDER)), list(clause.args)
