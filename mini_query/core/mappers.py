"""Ready-made row mappers for common result shapes."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Type, TypeVar

from .rows import Row

T = TypeVar("T")


def _as_row(row: Any) -> Row:
    if isinstance(row, Row):
        return row
    return Row.from_dbapi(None, row)


def as_dict(row: Any) -> dict[str, Any]:
    """Map one row to a plain `dict`."""

    return dict(_as_row(row))


def as_tuple(row: Any) -> tuple[Any, ...]:
    """Map one row to a tuple of its values in column order."""

    if isinstance(row, tuple):
        return row
    return _as_row(row).astuple()


def scalar(row: Any) -> Any:
    """Return the first column of the row."""

    return as_tuple(row)[0]


def column(key: str | int) -> Callable[[Any], Any]:
    """Build a mapper returning one column by name or 0-based position."""

    def _map(row: Any) -> Any:
        return _as_row(row)[key]

    return _map


def into(cls: Type[T]) -> Callable[[Any], T]:
    """Build a mapper creating `cls(**columns)` for each row.

    For dataclasses only columns matching init fields are passed, so queries
    may select extra columns.
    """

    if dataclasses.is_dataclass(cls):
        accepted = {f.name for f in dataclasses.fields(cls) if f.init}

        def _map_dataclass(row: Any) -> T:
            values = _as_row(row)
            return cls(**{k: v for k, v in values.items() if k in accepted})

        return _map_dataclass

    def _map(row: Any) -> T:
        return cls(**dict(_as_row(row)))  # type: ignore[call-arg]

    return _map
