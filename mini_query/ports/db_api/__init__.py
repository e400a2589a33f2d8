"""DB-API adapter, connection source, and dialect exports."""

from .connection import DBAPIConnection, DBAPICursor, DBAPIStatement
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect
from .sources import DBAPIConnectionSource, PooledConnectionSource, enable_autocommit

__all__ = [
    "DBAPIConnection",
    "DBAPIConnectionSource",
    "DBAPICursor",
    "DBAPIStatement",
    "Dialect",
    "MySQLDialect",
    "PooledConnectionSource",
    "PostgresDialect",
    "SQLiteDialect",
    "enable_autocommit",
]
