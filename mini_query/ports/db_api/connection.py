"""DB-API adapters for the core connection, statement, and cursor ports."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ...core.rows import Row
from ...core.types import PositionalParams
from .dialects import Dialect

_UNBOUND = object()


class DBAPICursor:
    """Result cursor over the statement's DB-API cursor.

    Rows are fetched one at a time with `fetchone()`. The underlying DB-API
    cursor belongs to the statement and is closed with it.
    """

    def __init__(self, cursor: Any):
        self._cursor: Any | None = cursor
        self._row: Row | None = None

    @property
    def row(self) -> Row:
        if self._row is None:
            raise RuntimeError("cursor is not positioned on a row")
        return self._row

    def advance(self) -> bool:
        if self._cursor is None:
            raise RuntimeError("cursor is closed")
        raw = self._cursor.fetchone()
        if raw is None:
            self._row = None
            return False
        self._row = Row.from_dbapi(self._cursor, raw)
        return True

    def close(self) -> None:
        self._cursor = None
        self._row = None


class DBAPIStatement:
    """Positional statement over one DB-API cursor.

    Values are kept per 1-based position and passed to `cursor.execute()` as a
    list at execution time.
    """

    def __init__(self, cursor: Any, sql: str, dialect: Dialect):
        self.sql = sql
        self.parameter_count = dialect.count_placeholders(sql)
        self._cursor = cursor
        self._params: list[Any] = [_UNBOUND] * self.parameter_count
        self._closed = False

    def _require_open(self) -> Any:
        if self._closed:
            raise RuntimeError("statement is closed")
        return self._cursor

    def bind_param(self, index: int, value: Any) -> None:
        self._require_open()
        if not 1 <= index <= self.parameter_count:
            raise IndexError(
                f"parameter index {index} is out of range (1..{self.parameter_count})"
            )
        self._params[index - 1] = value

    def parameters(self) -> PositionalParams:
        """Return bound values in position order; every position must be bound."""

        for position, value in enumerate(self._params, start=1):
            if value is _UNBOUND:
                raise ValueError(f"No value specified for parameter {position}")
        return list(self._params)

    def _execute(self) -> Any:
        cur = self._require_open()
        # Always pass the list: format drivers unescape `%%` only when given params.
        cur.execute(self.sql, self.parameters())
        return cur

    def execute_update(self) -> int:
        cur = self._execute()
        rowcount = getattr(cur, "rowcount", None)
        return -1 if rowcount is None else int(rowcount)

    def execute_query(self) -> DBAPICursor:
        return DBAPICursor(self._execute())

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._cursor, "close", None)
        if callable(close):
            close()


class DBAPIConnection:
    """Borrowed DB-API connection; `close()` hands the raw connection back."""

    def __init__(
        self,
        conn: Any,
        dialect: Dialect,
        *,
        on_close: Callable[[Any], None],
        arraysize: Optional[int] = None,
    ):
        self.conn: Any | None = conn
        self.dialect = dialect
        self._on_close = on_close
        self._arraysize = arraysize

    def _require_open_connection(self) -> Any:
        if self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def prepare_statement(self, sql: str) -> DBAPIStatement:
        """Open a DB-API cursor and wrap it as a positional statement."""

        conn = self._require_open_connection()
        cur = conn.cursor()
        try:
            if self._arraysize is not None:
                cur.arraysize = self._arraysize
            return DBAPIStatement(cur, sql, self.dialect)
        except BaseException:
            close = getattr(cur, "close", None)
            if callable(close):
                close()
            raise

    def close(self) -> None:
        conn = self.conn
        if conn is None:
            return
        self.conn = None
        self._on_close(conn)
