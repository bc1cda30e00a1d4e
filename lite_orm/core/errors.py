"""Exception taxonomy for query validation and execution."""

from __future__ import annotations


class QueryError(Exception):
    """Base class for errors raised by the query core."""


class ConditionError(QueryError, ValueError):
    """Raised when a caller-supplied condition array is structurally invalid."""


class MalformedConditions(ConditionError):
    """Raised when a condition array is empty or has no clause fragment."""


class PlaceholderArgumentMismatch(ConditionError):
    """Raised when placeholder count and supplied argument count disagree.

    Attributes:
        fragment: The offending WHERE-clause fragment.
        placeholders: Number of `?` placeholders found in `fragment`.
        arguments: Number of bind arguments supplied with it.
    """

    def __init__(self, fragment: str, placeholders: int, arguments: int):
        self.fragment = fragment
        self.placeholders = placeholders
        self.arguments = arguments
        super().__init__(
            f"Condition {fragment!r} has {placeholders} placeholder(s) "
            f"but {arguments} argument(s) were supplied."
        )


class ExecutionError(QueryError):
    """Raised by the database adapter when the engine rejects or fails a query."""
