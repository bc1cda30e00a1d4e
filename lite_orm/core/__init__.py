"""Public core API for condition validation, clause building, and finds."""

from .conditions import (
    AllRows,
    Conditions,
    IdSelection,
    SpecificIds,
    count_placeholders,
    select_ids,
    validate_conditions,
)
from .contracts import DatabasePort, DialectPort, MaterializerPort, QueryExecutorPort
from .errors import (
    ConditionError,
    ExecutionError,
    MalformedConditions,
    PlaceholderArgumentMismatch,
    QueryError,
)
from .executor import SqlQueryExecutor
from .fluent import FluentQuery
from .metadata import ModelMetadata, build_model_metadata, get_model_metadata
from .models import DataclassModel, pk_fields, row_to_model, table_name
from .query_builder import (
    ALL_ROWS,
    Clause,
    CompiledQuery,
    clause_for_id,
    clause_for_ids,
    clause_from_conditions,
    compile_select,
)
from .query_handler import QueryHandler

__all__ = [
    "ALL_ROWS",
    "AllRows",
    "Clause",
    "CompiledQuery",
    "ConditionError",
    "Conditions",
    "DataclassModel",
    "DatabasePort",
    "DialectPort",
    "ExecutionError",
    "FluentQuery",
    "IdSelection",
    "MalformedConditions",
    "MaterializerPort",
    "ModelMetadata",
    "PlaceholderArgumentMismatch",
    "QueryError",
    "QueryExecutorPort",
    "QueryHandler",
    "SpecificIds",
    "SqlQueryExecutor",
    "build_model_metadata",
    "clause_for_id",
    "clause_for_ids",
    "clause_from_conditions",
    "compile_select",
    "count_placeholders",
    "get_model_metadata",
    "pk_fields",
    "row_to_model",
    "select_ids",
    "table_name",
    "validate_conditions",
]
