from __future__ import annotations

import unittest

from mini_query import DataAccessError, SqlTemplate, StatementBuilder, scalar
from tests.driver_fakes import FakeConnectionSource, FakeDriverError


class PrepareTests(unittest.TestCase):
    def test_prepare_returns_builder_owning_one_connection(self) -> None:
        source = FakeConnectionSource()

        builder = SqlTemplate(source).prepare("SELECT 1")

        self.assertIsInstance(builder, StatementBuilder)
        self.assertEqual(builder.sql, "SELECT 1")
        self.assertEqual(source.acquire_count, 1)
        self.assertEqual(source.release_count, 0)
        self.assertEqual(source.last_statement.sql, "SELECT 1")
        builder.release()
        self.assertEqual(source.release_count, 1)

    def test_prepare_failure_hands_connection_back(self) -> None:
        source = FakeConnectionSource(fail_prepare=True)

        with self.assertRaises(DataAccessError) as ctx:
            SqlTemplate(source).prepare("SELEC oops")

        self.assertIsInstance(ctx.exception.__cause__, FakeDriverError)
        self.assertIn("malformed SQL", str(ctx.exception))
        self.assertEqual(ctx.exception.sql, "SELEC oops")
        self.assertEqual(source.acquire_count, 1)
        self.assertEqual(source.release_count, 1)
        self.assertEqual(source.last_connection.close_calls, 1)

    def test_prepare_failure_with_failing_close_still_raises_primary_error(self) -> None:
        source = FakeConnectionSource(fail_prepare=True, connection_close_error=True)

        with self.assertRaises(DataAccessError) as ctx:
            SqlTemplate(source).prepare("SELEC oops")

        self.assertIn("malformed SQL", str(ctx.exception))
        self.assertEqual(source.acquire_count, source.release_count)

    def test_acquire_failure_is_wrapped(self) -> None:
        source = FakeConnectionSource(fail_acquire=True)

        with self.assertRaises(DataAccessError) as ctx:
            SqlTemplate(source).prepare("SELECT 1")

        self.assertIsInstance(ctx.exception.__cause__, FakeDriverError)
        self.assertEqual(source.acquire_count, 0)
        self.assertEqual(source.release_count, 0)

    def test_empty_sql_is_rejected_without_acquiring(self) -> None:
        source = FakeConnectionSource()
        template = SqlTemplate(source)

        for sql in ("", "   ", None):
            with self.subTest(sql=sql):
                with self.assertRaises(DataAccessError):
                    template.prepare(sql)  # type: ignore[arg-type]

        self.assertEqual(source.acquire_count, 0)

    def test_source_without_acquire_raises(self) -> None:
        with self.assertRaises(TypeError):
            SqlTemplate(object())  # type: ignore[arg-type]

    def test_prepare_failures_are_logged(self) -> None:
        source = FakeConnectionSource(fail_prepare=True)

        with self.assertLogs("mini_query.core.template", level="ERROR") as logs:
            with self.assertRaises(DataAccessError):
                SqlTemplate(source).prepare("SELEC oops")

        self.assertIn("prepare statement failed", logs.output[0])


class ConvenienceTests(unittest.TestCase):
    def test_update_binds_params_positionally(self) -> None:
        source = FakeConnectionSource()

        count = SqlTemplate(source).update("UPDATE t SET x=? WHERE id=?", 5, 1)

        self.assertEqual(count, 1)
        self.assertEqual(source.last_statement.executed_updates, [[5, 1]])
        self.assertEqual(source.acquire_count, source.release_count)

    def test_query_and_query_one(self) -> None:
        source = FakeConnectionSource(parameter_count=1, rows=[(10,), (20,)])
        template = SqlTemplate(source)

        self.assertEqual(template.query("SELECT v FROM t WHERE k=?", scalar, "a"), [10, 20])
        self.assertEqual(template.query_one("SELECT v FROM t WHERE k=?", scalar, "a"), 10)
        self.assertEqual(source.last_statement.executed_queries, [["a"]])
        self.assertEqual(source.acquire_count, 2)
        self.assertEqual(source.release_count, 2)

    def test_query_with_too_many_params_releases(self) -> None:
        source = FakeConnectionSource(parameter_count=1)

        with self.assertRaises(DataAccessError):
            SqlTemplate(source).query("SELECT v FROM t WHERE k=?", scalar, "a", "b")

        self.assertEqual(source.acquire_count, source.release_count)
        self.assertEqual(source.last_statement.close_calls, 1)


if __name__ == "__main__":
    unittest.main()
