"""Error types surfaced to callers of the query template."""

from __future__ import annotations

from typing import Optional


class DataAccessError(Exception):
    """Single failure kind raised by template and statement operations.

    The lower-level driver (or row mapper) exception is kept as `__cause__`.
    """

    def __init__(self, message: str, *, sql: Optional[str] = None):
        super().__init__(message)
        self.sql = sql

    @classmethod
    def from_exception(
        cls,
        operation: str,
        exc: BaseException,
        *,
        sql: Optional[str] = None,
    ) -> DataAccessError:
        """Build an error whose message names the failed operation and its cause."""

        detail = str(exc) or type(exc).__name__
        return cls(f"{operation} failed: {detail}", sql=sql)
