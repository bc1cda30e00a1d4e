"""Condition primitives for query filtering.

A condition array is the flat form callers have historically passed around:
element 0 is a WHERE fragment with positional `?` placeholders and the
remaining elements are the bind arguments, in placeholder order.
`Conditions` is the typed replacement, and `IdSelection` makes the
"no ids means every row" rule of id-list queries explicit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from .errors import MalformedConditions, PlaceholderArgumentMismatch
from .types import ConditionArray

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"


def count_placeholders(fragment: str) -> int:
    """Return the number of positional `?` placeholders in a fragment."""

    return fragment.count(PLACEHOLDER)


def validate_conditions(conditions: ConditionArray) -> None:
    """Validate a raw condition array before any SQL is built.

    Args:
        conditions: `None` for "no filter", or a sequence whose first element
            is the clause fragment and whose remaining elements are its
            bind arguments.

    Raises:
        MalformedConditions: If the array is empty or element 0 is not a string.
        PlaceholderArgumentMismatch: If the placeholder count in element 0 is
            not `len(conditions) - 1`.
    """

    if conditions is None:
        return
    if isinstance(conditions, (str, bytes)) or not isinstance(conditions, SequenceABC):
        raise MalformedConditions(
            "condition array must be a sequence, got "
            f"{type(conditions).__name__}"
        )
    if len(conditions) == 0:
        logger.debug("Rejected empty condition array")
        raise MalformedConditions(
            "condition array must contain at least the clause fragment"
        )

    fragment = conditions[0]
    if not isinstance(fragment, str):
        raise MalformedConditions(
            f"clause fragment must be a string, got {type(fragment).__name__}"
        )

    placeholders = count_placeholders(fragment)
    arguments = len(conditions) - 1
    if placeholders != arguments:
        logger.debug(
            "Rejected condition %r: %d placeholder(s), %d argument(s)",
            fragment,
            placeholders,
            arguments,
        )
        raise PlaceholderArgumentMismatch(fragment, placeholders, arguments)


@dataclass(frozen=True)
class Conditions:
    """A validated WHERE fragment paired with its positional arguments.

    Attributes:
        fragment: Clause text; caller values only ever appear as `?`.
        arguments: Bind values, one per placeholder, left to right.
    """

    fragment: str
    arguments: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.fragment, str):
            raise MalformedConditions(
                f"clause fragment must be a string, got {type(self.fragment).__name__}"
            )
        object.__setattr__(self, "fragment", self.fragment.strip())
        object.__setattr__(self, "arguments", tuple(self.arguments))
        validate_conditions((self.fragment, *self.arguments))

    @classmethod
    def of(cls, fragment: str, *arguments: Any) -> "Conditions":
        """Build conditions from a fragment and its arguments.

        Example:
            `Conditions.of("name = ? and age > ?", "Alice", 30)`
        """

        return cls(fragment, arguments)

    @classmethod
    def from_array(cls, conditions: ConditionArray) -> Optional["Conditions"]:
        """Build conditions from a flat condition array.

        Returns `None` for a `None` array, which callers read as "no filter".
        """

        validate_conditions(conditions)
        if conditions is None:
            return None
        return cls(conditions[0], tuple(conditions[1:]))


@dataclass(frozen=True)
class AllRows:
    """Id selection that applies no filter: every row of the table."""


@dataclass(frozen=True)
class SpecificIds:
    """Id selection restricted to the listed primary-key values."""

    ids: Tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", tuple(self.ids))
        if not self.ids:
            raise ValueError("SpecificIds requires at least one id; use AllRows().")


IdSelection = AllRows | SpecificIds


def select_ids(ids: Sequence[Any]) -> IdSelection:
    """Map an id sequence to a selection; an empty sequence selects all rows."""

    if not ids:
        return AllRows()
    return SpecificIds(tuple(ids))
