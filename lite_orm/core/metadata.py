"""Model metadata extraction used by query compilation."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Generic, Tuple, Type, TypeVar

from .models import DataclassModel, model_fields, pk_fields, table_name

T = TypeVar("T", bound=DataclassModel)


@dataclass(frozen=True)
class ModelMetadata(Generic[T]):
    """Normalized model description: backing table, primary key, and columns."""

    model: Type[T]
    table: str
    pk: str
    columns: Tuple[str, ...]


def build_model_metadata(model: Type[T]) -> ModelMetadata[T]:
    """Build model metadata from dataclass annotations and field metadata.

    Args:
        model: Dataclass model type.

    Returns:
        Immutable metadata object used by the executor and query handler.

    Raises:
        TypeError: If `model` is not a dataclass.
        ValueError: If model has zero or multiple primary key fields.
    """

    pks = pk_fields(model)
    if len(pks) != 1:
        raise ValueError(
            f"{model.__name__} must declare exactly 1 PK field, found {len(pks)}."
        )

    return ModelMetadata(
        model=model,
        table=table_name(model),
        pk=pks[0].name,
        columns=tuple(field.name for field in model_fields(model)),
    )


@lru_cache(maxsize=None)
def get_model_metadata(model: Type[T]) -> ModelMetadata[T]:
    """Return cached metadata for `model`, resolving it on first use."""

    return build_model_metadata(model)
