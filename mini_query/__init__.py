"""Fluent query template over DB-API connection sources."""

from .core import (
    ConnectionPort,
    ConnectionSourcePort,
    CursorPort,
    DataAccessError,
    Row,
    RowMapper,
    SqlTemplate,
    StatementBuilder,
    StatementPort,
    as_dict,
    as_tuple,
    column,
    into,
    scalar,
)
from .ports import (
    DBAPIConnectionSource,
    Dialect,
    MySQLDialect,
    PooledConnectionSource,
    PostgresDialect,
    SQLiteDialect,
)

__all__ = [
    "SqlTemplate",
    "StatementBuilder",
    "DataAccessError",
    "Row",
    "RowMapper",
    "ConnectionPort",
    "ConnectionSourcePort",
    "CursorPort",
    "StatementPort",
    "as_dict",
    "as_tuple",
    "column",
    "into",
    "scalar",
    "DBAPIConnectionSource",
    "PooledConnectionSource",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
]
