"""Query template: turns SQL text into ready-to-bind statement builders."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, TypeVar

from .contracts import ConnectionPort, ConnectionSourcePort, RowMapper
from .errors import DataAccessError
from .release import release_quietly
from .statement import StatementBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlTemplate:
    """Entry point that borrows a connection and prepares one statement per call."""

    def __init__(self, source: ConnectionSourcePort):
        """Create template.

        Args:
            source: Connection source exposing `acquire()`; every borrowed
                connection is handed back through its `close()`.
        """

        if not callable(getattr(source, "acquire", None)):
            raise TypeError("source must provide an acquire() method.")
        self.source = source

    def prepare(self, sql: str) -> StatementBuilder:
        """Borrow a connection and prepare `sql` on it.

        Raises:
            DataAccessError: SQL text is empty, or acquisition/preparation
                failed. A connection borrowed before the failure is handed back.
        """

        if not isinstance(sql, str) or not sql.strip():
            raise DataAccessError(
                "prepare statement failed: SQL text must be a non-empty string"
            )

        connection: ConnectionPort | None = None
        try:
            connection = self.source.acquire()
            statement = connection.prepare_statement(sql)
        except Exception as exc:
            logger.error("prepare statement failed: %s", exc, exc_info=True)
            release_quietly(None, None, connection)
            raise DataAccessError.from_exception("prepare statement", exc, sql=sql) from exc
        except BaseException:
            release_quietly(None, None, connection)
            raise

        logger.debug("Prepared statement: %s", sql[:80])
        return StatementBuilder(connection, statement, sql=sql)

    def update(self, sql: str, *params: Any) -> int:
        """Prepare, bind `params` positionally, and execute as an update."""

        return self._bind_all(self.prepare(sql), params).execute_update()

    def query(self, sql: str, mapper: RowMapper[T], *params: Any) -> list[T]:
        """Prepare, bind, execute as a query, and map every row."""

        return self._bind_all(self.prepare(sql), params).execute_query().map_all(mapper)

    def query_one(self, sql: str, mapper: RowMapper[T], *params: Any) -> Optional[T]:
        """Like `query()` but maps only the first row (`None` when empty)."""

        return self._bind_all(self.prepare(sql), params).execute_query().map_one(mapper)

    @staticmethod
    def _bind_all(builder: StatementBuilder, params: Sequence[Any]) -> StatementBuilder:
        for index, value in enumerate(params, start=1):
            builder.bind_object(index, value)
        return builder
