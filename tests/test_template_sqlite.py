from __future__ import annotations

import os
import sqlite3
import tempfile
import unittest
from dataclasses import dataclass
from typing import Optional

from mini_query import (
    DataAccessError,
    DBAPIConnectionSource,
    PooledConnectionSource,
    SqlTemplate,
    as_dict,
    into,
    scalar,
)


@dataclass
class Member:
    id: Optional[int] = None
    name: str = ""
    age: Optional[int] = None


class _CountingConnect:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self.opened: list[sqlite3.Connection] = []

    def __call__(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        self.opened.append(conn)
        return conn


class _SingleConnectionPool:
    """External pool stand-in holding one shared-memory sqlite connection."""

    def __init__(self) -> None:
        self.conn = sqlite3.connect(":memory:", isolation_level=None)
        self.borrowed = 0

    def acquire(self) -> sqlite3.Connection:
        self.borrowed += 1
        return self.conn

    def release(self, conn: sqlite3.Connection) -> None:
        assert conn is self.conn
        self.borrowed -= 1


class SqlTemplateSQLiteTests(unittest.TestCase):
    def setUp(self) -> None:
        fd, self.db_path = tempfile.mkstemp(prefix="mini_query_", suffix=".db")
        os.close(fd)
        self.addCleanup(lambda: os.path.exists(self.db_path) and os.remove(self.db_path))
        self.connect = _CountingConnect(self.db_path)
        self.template = SqlTemplate(DBAPIConnectionSource(self.connect))
        self.template.prepare(
            'CREATE TABLE "member" ("id" INTEGER PRIMARY KEY, "name" TEXT, "age" INTEGER)'
        ).execute_update()

    def _insert(self, member_id: int, name: str, age: Optional[int]) -> None:
        (
            self.template.prepare('INSERT INTO "member" ("id", "name", "age") VALUES (?, ?, ?)')
            .bind_long(1, member_id)
            .bind_string(2, name)
            .bind_long(3, age)
            .execute_update()
        )

    def test_update_then_query_roundtrip(self) -> None:
        self._insert(1, "alice", 30)
        self._insert(2, "bob", None)

        count = (
            self.template.prepare('UPDATE "member" SET "age" = ? WHERE "id" = ?')
            .bind_long(1, 41)
            .bind_long(2, 2)
            .execute_update()
        )
        members = (
            self.template.prepare('SELECT "id", "name", "age" FROM "member" ORDER BY "id"')
            .execute_query()
            .map_all(into(Member))
        )

        self.assertEqual(count, 1)
        self.assertEqual(members, [Member(1, "alice", 30), Member(2, "bob", 41)])

    def test_map_one_and_missing_row(self) -> None:
        self._insert(1, "alice", 30)

        found = (
            self.template.prepare('SELECT "name" FROM "member" WHERE "id" = ?')
            .bind_long(1, 1)
            .execute_query()
            .map_one(scalar)
        )
        missing = (
            self.template.prepare('SELECT "name" FROM "member" WHERE "id" = ?')
            .bind_long(1, 99)
            .execute_query()
            .map_one(scalar)
        )

        self.assertEqual(found, "alice")
        self.assertIsNone(missing)

    def test_convenience_methods(self) -> None:
        self.template.update('INSERT INTO "member" ("id", "name") VALUES (?, ?)', 1, "alice")
        self.template.update('INSERT INTO "member" ("id", "name") VALUES (?, ?)', 2, "bob")

        rows = self.template.query('SELECT "id", "name" FROM "member" WHERE "id" > ?', as_dict, 0)
        total = self.template.query_one('SELECT COUNT(*) FROM "member"', scalar)

        self.assertEqual(rows, [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}])
        self.assertEqual(total, 2)

    def test_every_connection_is_closed(self) -> None:
        self._insert(1, "alice", 30)
        self.template.query('SELECT * FROM "member"', as_dict)
        with self.assertRaises(DataAccessError):
            self.template.query('SELECT * FROM "member" WHERE "id" = ?', as_dict)

        for conn in self.connect.opened:
            with self.assertRaises(sqlite3.ProgrammingError):
                conn.execute("SELECT 1")

    def test_malformed_sql_fails_on_execution(self) -> None:
        builder = self.template.prepare('SELEC "id" FROM "member"')

        with self.assertRaises(DataAccessError) as ctx:
            builder.execute_query()

        self.assertIsInstance(ctx.exception.__cause__, sqlite3.OperationalError)
        self.assertTrue(builder.released)

    def test_constraint_violation_is_wrapped(self) -> None:
        self._insert(1, "alice", 30)

        with self.assertRaises(DataAccessError) as ctx:
            self._insert(1, "again", 1)

        self.assertIsInstance(ctx.exception.__cause__, sqlite3.IntegrityError)

    def test_placeholder_inside_literal_is_not_a_parameter(self) -> None:
        self._insert(1, "what?", 30)

        builder = self.template.prepare('SELECT "id" FROM "member" WHERE "name" = \'what?\'')
        with self.assertRaises(DataAccessError):
            builder.bind_long(1, 1)

        self.assertEqual(
            self.template.query_one('SELECT "id" FROM "member" WHERE "name" = \'what?\'', scalar),
            1,
        )


class PooledSourceSQLiteTests(unittest.TestCase):
    def test_connections_are_returned_to_pool(self) -> None:
        pool = _SingleConnectionPool()
        self.addCleanup(pool.conn.close)
        template = SqlTemplate(PooledConnectionSource(pool))

        template.update('CREATE TABLE "t" ("id" INTEGER, "name" TEXT)')
        template.update('INSERT INTO "t" VALUES (?, ?)', 1, "pool")
        name = template.query_one('SELECT "name" FROM "t" WHERE "id" = ?', scalar, 1)

        with self.assertRaises(DataAccessError):
            template.prepare("DROP TABLE").execute_update()

        self.assertEqual(name, "pool")
        self.assertEqual(pool.borrowed, 0)


if __name__ == "__main__":
    unittest.main()
