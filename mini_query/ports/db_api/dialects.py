"""Positional placeholder dialects for DB-API drivers."""

from __future__ import annotations

import re

# Quoted literals, quoted identifiers, and comments hold no qmark/numeric placeholders.
_NON_CODE_RE = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|`[^`]*`"
    r"|--[^\n]*"
    r"|/\*.*?\*/",
    re.DOTALL,
)
_FORMAT_RE = re.compile(r"%%|%s")
_NUMERIC_RE = re.compile(r"(?<![:\w]):(\d+)")


def strip_literals(sql: str) -> str:
    """Blank out string literals, quoted identifiers, and comments."""

    return _NON_CODE_RE.sub(" ", sql)


class Dialect:
    """Base dialect that defines positional placeholder behavior."""

    name: str = "generic"
    paramstyle: str = "qmark"

    def placeholder(self, position: int) -> str:
        """Return the placeholder for 1-based `position`."""

        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        if self.paramstyle == "numeric":
            return f":{position}"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def count_placeholders(self, sql: str) -> int:
        """Return how many positional parameters `sql` declares.

        `format` drivers interpolate over the whole text, quoted literals
        included, so a literal percent must be written `%%` there.
        """

        if self.paramstyle == "format":
            return sum(1 for token in _FORMAT_RE.findall(sql) if token == "%s")
        code = strip_literals(sql)
        if self.paramstyle == "qmark":
            return code.count("?")
        if self.paramstyle == "numeric":
            return max((int(n) for n in _NUMERIC_RE.findall(code)), default=0)
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` parameters)."""

    name = "sqlite"
    paramstyle = "qmark"


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` positional parameters)."""

    name = "postgres"
    paramstyle = "format"


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters)."""

    name = "mysql"
    paramstyle = "format"
