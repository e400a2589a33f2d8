"""Fluent statement builder owning one connection, statement, and cursor."""

from __future__ import annotations

import contextlib
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterator, Optional, TypeVar

from .contracts import ConnectionPort, CursorPort, RowMapper, StatementPort
from .errors import DataAccessError
from .release import release_quietly

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StatementBuilder:
    """Bind, execute, and map one prepared statement.

    A builder covers exactly one statement lifecycle:
    `bind_*()` calls, then either `execute_update()` or
    `execute_query()` followed by `map_all()`/`map_one()`. Cursor, statement,
    and connection are released exactly once, on success and on failure. Any
    failure releases everything and raises `DataAccessError`; the builder must
    not be used afterwards.
    """

    def __init__(
        self,
        connection: ConnectionPort,
        statement: StatementPort,
        *,
        sql: Optional[str] = None,
    ):
        self._connection = connection
        self._statement = statement
        self._cursor: CursorPort | None = None
        self._sql = sql
        self._executed = False
        self._released = False

    @property
    def sql(self) -> Optional[str]:
        return self._sql

    @property
    def released(self) -> bool:
        return self._released

    def bind_string(self, index: int, value: Optional[str]) -> StatementBuilder:
        return self._bind(index, value, (str,), "str")

    def bind_long(self, index: int, value: Optional[int]) -> StatementBuilder:
        return self._bind(index, value, (int,), "int", exclude=(bool,))

    def bind_float(self, index: int, value: Optional[float]) -> StatementBuilder:
        return self._bind(index, value, (float, int), "float", exclude=(bool,))

    def bind_bool(self, index: int, value: Optional[bool]) -> StatementBuilder:
        return self._bind(index, value, (bool,), "bool")

    def bind_decimal(self, index: int, value: Optional[Decimal]) -> StatementBuilder:
        return self._bind(index, value, (Decimal,), "Decimal")

    def bind_bytes(self, index: int, value: Optional[bytes]) -> StatementBuilder:
        return self._bind(index, value, (bytes, bytearray, memoryview), "bytes")

    def bind_date(self, index: int, value: Optional[date]) -> StatementBuilder:
        return self._bind(index, value, (date,), "date", exclude=(datetime,))

    def bind_datetime(self, index: int, value: Optional[datetime]) -> StatementBuilder:
        return self._bind(index, value, (datetime,), "datetime")

    def bind_null(self, index: int) -> StatementBuilder:
        return self._bind(index, None, (object,), "None")

    def bind_object(self, index: int, value: Any) -> StatementBuilder:
        """Bind any value the driver accepts, without a type check."""

        return self._bind(index, value, (object,), "object")

    def execute_update(self) -> int:
        """Run an insert/update/delete and release all resources.

        Returns the affected row count reported by the driver (`-1` when unknown).
        """

        self._start_execution("execute_update")
        with self._failure_scope("execute update"):
            count = self._statement.execute_update()
        self.release()
        logger.debug("Update affected %s rows", count)
        return count

    def execute_query(self) -> StatementBuilder:
        """Run a query and keep its cursor for a following `map_*()` call."""

        self._start_execution("execute_query")
        with self._failure_scope("execute query"):
            self._cursor = self._statement.execute_query()
        return self

    def map_all(self, mapper: RowMapper[T]) -> list[T]:
        """Map every remaining row in cursor order, then release."""

        cursor = self._require_cursor()
        with self._failure_scope("map rows"):
            results: list[T] = []
            while cursor.advance():
                results.append(mapper(cursor.row))
        self.release()
        return results

    def map_one(self, mapper: RowMapper[T]) -> Optional[T]:
        """Map the first row, or return `None` for an empty result.

        Rows after the first are not inspected.
        """

        cursor = self._require_cursor()
        with self._failure_scope("map row"):
            result = mapper(cursor.row) if cursor.advance() else None
        self.release()
        return result

    def release(self) -> None:
        """Close cursor, statement, and connection; later calls do nothing."""

        if self._released:
            return
        self._released = True
        cursor, self._cursor = self._cursor, None
        release_quietly(cursor, self._statement, self._connection)

    def _bind(
        self,
        index: int,
        value: Any,
        types: tuple[type, ...],
        type_name: str,
        *,
        exclude: tuple[type, ...] = (),
    ) -> StatementBuilder:
        self._require_bindable()
        with self._failure_scope(f"bind parameter {index!r}"):
            if not isinstance(index, int) or isinstance(index, bool):
                raise TypeError(f"parameter index must be int, got {type(index).__name__}")
            if index < 1:
                raise IndexError(f"parameter index must be >= 1, got {index}")
            if value is not None and (
                not isinstance(value, types) or isinstance(value, exclude)
            ):
                raise TypeError(
                    f"parameter {index} expects {type_name}, got {type(value).__name__}"
                )
            self._statement.bind_param(index, value)
        return self

    @contextlib.contextmanager
    def _failure_scope(self, operation: str) -> Iterator[None]:
        """Release everything when the block fails and raise `DataAccessError`."""

        try:
            yield
        except DataAccessError:
            self.release()
            raise
        except Exception as exc:
            logger.error("%s failed: %s", operation, exc, exc_info=True)
            self.release()
            raise DataAccessError.from_exception(operation, exc, sql=self._sql) from exc
        except BaseException:
            self.release()
            raise

    def _usage_error(self, message: str) -> RuntimeError:
        self.release()
        return RuntimeError(message)

    def _require_open(self) -> None:
        if self._released:
            raise RuntimeError("statement builder is already released")

    def _require_bindable(self) -> None:
        self._require_open()
        if self._executed:
            raise self._usage_error("cannot bind parameters after the statement was executed")

    def _start_execution(self, name: str) -> None:
        self._require_open()
        if self._executed:
            raise self._usage_error(f"{name}() called on an already executed statement")
        self._executed = True

    def _require_cursor(self) -> CursorPort:
        self._require_open()
        if self._cursor is None:
            raise self._usage_error("execute_query() must succeed before mapping results")
        return self._cursor

    def __enter__(self) -> StatementBuilder:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.release()
