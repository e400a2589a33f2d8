"""Core port contracts implemented by driver adapters and row mappers."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class CursorPort(Protocol):
    """Result cursor produced by a query execution."""

    @property
    def row(self) -> Any: ...

    def advance(self) -> bool: ...

    def close(self) -> None: ...


class StatementPort(Protocol):
    """Prepared statement bound to one borrowed connection."""

    def bind_param(self, index: int, value: Any) -> None: ...

    def execute_update(self) -> int: ...

    def execute_query(self) -> CursorPort: ...

    def close(self) -> None: ...


class ConnectionPort(Protocol):
    """Borrowed connection; `close()` hands it back to its source."""

    def prepare_statement(self, sql: str) -> StatementPort: ...

    def close(self) -> None: ...


class ConnectionSourcePort(Protocol):
    """Provider of connections (direct driver factory or external pool)."""

    def acquire(self) -> ConnectionPort: ...


class RowMapper(Protocol[T_co]):
    """Caller-supplied callable converting the current row to a value."""

    def __call__(self, row: Any) -> T_co: ...
