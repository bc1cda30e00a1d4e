"""lite_orm: find operations over dataclass models on DB-API databases."""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .ports import Database, Dialect, MySQLDialect, PostgresDialect, SQLiteDialect

__all__ = [
    *_core_all,
    "Database",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
]
