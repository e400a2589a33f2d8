"""Row view handed to row mappers."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Sequence

from .types import ColumnNames


class Row(Mapping[str, Any]):
    """Read-only mapping of column name to value with positional access.

    `row["name"]` looks a column up by name and `row[0]` by 0-based position.
    When a result carries duplicate column names, name lookup returns the first.
    """

    __slots__ = ("_columns", "_values", "_positions")

    def __init__(self, columns: ColumnNames, values: Sequence[Any]):
        if len(columns) != len(values):
            raise ValueError(
                f"Row has {len(values)} values for {len(columns)} columns."
            )
        self._columns = tuple(columns)
        self._values = tuple(values)
        positions: dict[str, int] = {}
        for position, name in enumerate(self._columns):
            positions.setdefault(name, position)
        self._positions = positions

    @classmethod
    def from_dbapi(cls, cursor: Any, raw: Any) -> Row:
        """Normalize one DB-API row.

        Supports mapping rows, row objects exposing `keys()` (e.g.
        `sqlite3.Row`), and tuple/list rows described by `cursor.description`.
        """

        if isinstance(raw, Row):
            return raw

        if isinstance(raw, Mapping):
            return cls(list(raw.keys()), list(raw.values()))

        if isinstance(raw, (tuple, list)):
            desc = getattr(cursor, "description", None)
            if not desc:
                raise TypeError("Cursor has no description; cannot name tuple row columns.")
            return cls([d[0] for d in desc], raw)

        keys = getattr(raw, "keys", None)
        if callable(keys):
            return cls(list(keys()), tuple(raw))

        raise TypeError(f"Unsupported row type: {type(raw)}")

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    def astuple(self) -> tuple[Any, ...]:
        """Return all values in column order."""

        return self._values

    def __getitem__(self, key: Any) -> Any:
        if isinstance(key, int) and not isinstance(key, bool):
            return self._values[key]
        try:
            position = self._positions[key]
        except (KeyError, TypeError):
            raise KeyError(key) from None
        return self._values[position]

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{name}={value!r}" for name, value in zip(self._columns, self._values))
        return f"Row({pairs})"
