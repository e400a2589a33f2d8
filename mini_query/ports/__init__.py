"""Public port exports for concrete adapter implementations."""

from .db_api import (
    DBAPIConnectionSource,
    Dialect,
    MySQLDialect,
    PooledConnectionSource,
    PostgresDialect,
    SQLiteDialect,
)

__all__ = [
    "DBAPIConnectionSource",
    "PooledConnectionSource",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
]
