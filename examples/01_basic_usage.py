"""Basic prepare/bind/execute/map example for mini_query SqlTemplate."""

from __future__ import annotations

import os
import sqlite3
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_query").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_query import DBAPIConnectionSource, SqlTemplate, into, scalar


@dataclass
class User:
    id: Optional[int] = None
    email: str = ""
    age: Optional[int] = None


def main() -> None:
    # 1) A file database: every statement borrows its own connection.
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    source = DBAPIConnectionSource(sqlite3.connect, db_path)
    template = SqlTemplate(source)
    # Placeholders follow the source dialect (`?` here, `%s` for psycopg/pymysql).
    marks = ", ".join(source.dialect.placeholder(position) for position in range(1, 4))

    try:
        template.prepare(
            'CREATE TABLE "user" ("id" INTEGER PRIMARY KEY, "email" TEXT, "age" INTEGER)'
        ).execute_update()

        # 2) Fluent binding by 1-based position.
        for user_id, email, age in [(1, "alice@example.com", 25), (2, "bob@example.com", None)]:
            (
                template.prepare(f'INSERT INTO "user" ("id", "email", "age") VALUES ({marks})')
                .bind_long(1, user_id)
                .bind_string(2, email)
                .bind_long(3, age)
                .execute_update()
            )

        # 3) Map every row into a dataclass.
        users = (
            template.prepare('SELECT "id", "email", "age" FROM "user" ORDER BY "id"')
            .execute_query()
            .map_all(into(User))
        )
        print("All users:", users)

        # 4) First row only; `None` when nothing matches.
        email = (
            template.prepare('SELECT "email" FROM "user" WHERE "id" = ?')
            .bind_long(1, 2)
            .execute_query()
            .map_one(scalar)
        )
        print("User 2 email:", email)

        # 5) One-call helpers.
        template.update('UPDATE "user" SET "age" = ? WHERE "id" = ?', 31, 2)
        print("Ages:", template.query('SELECT "age" FROM "user" ORDER BY "id"', scalar))
    finally:
        os.remove(db_path)


if __name__ == "__main__":
    main()
