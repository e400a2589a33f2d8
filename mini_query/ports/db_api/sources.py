"""Connection sources producing `DBAPIConnection` wrappers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Optional

from .connection import DBAPIConnection
from .dialects import Dialect, SQLiteDialect

logger = logging.getLogger(__name__)


def _close_connection(conn: Any) -> None:
    close = getattr(conn, "close", None)
    if callable(close):
        close()


def _is_sqlite_connection(conn: Any) -> bool:
    module_name = type(conn).__module__
    return module_name.startswith("sqlite3") or module_name.startswith("_sqlite3")


def enable_autocommit(conn: Any) -> None:
    """Switch a raw DB-API connection to autocommit mode.

    Handles `autocommit(True)` methods (pymysql, MySQLdb), sqlite3's
    `isolation_level`, and writable `autocommit` attributes (psycopg).
    """

    autocommit = getattr(conn, "autocommit", None)
    if callable(autocommit):
        autocommit(True)
        return
    if _is_sqlite_connection(conn):
        conn.isolation_level = None
        return
    if hasattr(conn, "autocommit"):
        conn.autocommit = True
        return
    raise RuntimeError(
        f"Cannot enable autocommit on {type(conn).__name__}; pass autocommit=False."
    )


class _DBAPISource:
    def __init__(self, *, dialect: Optional[Dialect], arraysize: Optional[int]):
        if dialect is not None and not isinstance(dialect, Dialect):
            raise TypeError("dialect must be a Dialect instance.")
        if arraysize is not None and arraysize < 1:
            raise ValueError("arraysize must be >= 1.")
        self.dialect = dialect if dialect is not None else SQLiteDialect()
        self._arraysize = arraysize

    def _wrap(self, conn: Any, on_close: Callable[[Any], None]) -> DBAPIConnection:
        return DBAPIConnection(
            conn,
            self.dialect,
            on_close=on_close,
            arraysize=self._arraysize,
        )


class DBAPIConnectionSource(_DBAPISource):
    """Opens a new DB-API connection per `acquire()` and closes it on release."""

    def __init__(
        self,
        connect: Callable[..., Any],
        *connect_args: Any,
        dialect: Optional[Dialect] = None,
        arraysize: Optional[int] = None,
        autocommit: bool = True,
        **connect_kwargs: Any,
    ):
        """Create connection source.

        Args:
            connect: DB-API `connect` callable (e.g. `sqlite3.connect`).
            connect_args: Positional arguments forwarded to `connect`.
            dialect: Placeholder dialect; defaults to `SQLiteDialect()`.
            arraysize: Optional `cursor.arraysize` for prepared statements.
            autocommit: Switch new connections to autocommit mode.
            connect_kwargs: Keyword arguments forwarded to `connect`.
        """

        if not callable(connect):
            raise TypeError("connect must be callable.")
        super().__init__(dialect=dialect, arraysize=arraysize)
        self._connect = connect
        self._connect_args = connect_args
        self._connect_kwargs = connect_kwargs
        self._autocommit = autocommit

    def acquire(self) -> DBAPIConnection:
        conn = self._connect(*self._connect_args, **self._connect_kwargs)
        if self._autocommit:
            try:
                enable_autocommit(conn)
            except BaseException:
                _close_connection(conn)
                raise
        logger.debug("Opened %s connection", self.dialect.name)
        return self._wrap(conn, _close_connection)


class PooledConnectionSource(_DBAPISource):
    """Borrows raw connections from an external pool.

    The pool must expose `acquire()` and `release(conn)`; closing a borrowed
    `DBAPIConnection` returns the raw connection with `release()`.
    """

    def __init__(
        self,
        pool: Any,
        *,
        dialect: Optional[Dialect] = None,
        arraysize: Optional[int] = None,
    ):
        if not callable(getattr(pool, "acquire", None)) or not callable(
            getattr(pool, "release", None)
        ):
            raise TypeError("pool must provide acquire() and release(conn).")
        super().__init__(dialect=dialect, arraysize=arraysize)
        self._pool = pool

    def acquire(self) -> DBAPIConnection:
        return self._wrap(self._pool.acquire(), self._pool.release)
