"""Failure examples: every error is a DataAccessError and resources are released."""

from __future__ import annotations

import logging
import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_query").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_query import DataAccessError, PooledConnectionSource, SqlTemplate, scalar


class OneConnectionPool:
    """Tiny stand-in for an external pool."""

    def __init__(self) -> None:
        self.conn = sqlite3.connect(":memory:", isolation_level=None)
        self.borrowed = 0

    def acquire(self) -> sqlite3.Connection:
        self.borrowed += 1
        return self.conn

    def release(self, conn: sqlite3.Connection) -> None:
        self.borrowed -= 1


def main() -> None:
    logging.basicConfig(level=logging.CRITICAL)
    pool = OneConnectionPool()
    template = SqlTemplate(PooledConnectionSource(pool))
    template.update('CREATE TABLE "t" ("id" INTEGER PRIMARY KEY, "name" TEXT)')
    template.update('INSERT INTO "t" VALUES (?, ?)', 1, "alice")

    cases = {
        "type mismatch": lambda: template.prepare('SELECT 1 WHERE ? = 1').bind_long(1, "x"),
        "index out of range": lambda: template.prepare('SELECT "id" FROM "t"').bind_long(1, 1),
        "unbound parameter": lambda: template.prepare('SELECT ?').execute_query(),
        "malformed SQL": lambda: template.prepare("SELEC 1").execute_query(),
        "duplicate key": lambda: template.update('INSERT INTO "t" VALUES (?, ?)', 1, "again"),
        "mapper failure": lambda: template.query('SELECT "name" FROM "t"', lambda row: row[5]),
    }
    for label, action in cases.items():
        try:
            action()
        except DataAccessError as exc:
            print(f"{label}: {exc} (cause: {type(exc.__cause__).__name__})")

    # A builder left without a terminal call is released when the block exits.
    with template.prepare('SELECT "name" FROM "t" WHERE "id" = ?') as stmt:
        print("Prepared:", stmt.sql)
    print("Released after block:", stmt.released)

    print("Still borrowed:", pool.borrowed)
    print("Rows:", template.query_one('SELECT COUNT(*) FROM "t"', scalar))
    pool.conn.close()


if __name__ == "__main__":
    main()
