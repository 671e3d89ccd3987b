from __future__ import annotations

from src.task_manager.task_manager.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.task_manager.task_manager.main import SCHEMA_PATH


def test_split_respects_quotes():
    sql = "INSERT INTO t VALUES('a;b');\nINSERT INTO t VALUES(\"c;d\");\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES('a;b')",
        'INSERT INTO t VALUES("c;d")',
        "SELECT 1",
    ]


def test_split_skips_empty_statements():
    assert list(_iter_sql_statements(";;\n  ;SELECT 1;")) == ["SELECT 1"]


def test_strip_database_statements_and_comments():
    sql = "CREATE DATABASE foo;\nUSE foo;\n-- employees\nCREATE TABLE a(id INT);\n"

    stripped = _strip_create_db_and_use(sql)

    assert list(_iter_sql_statements(stripped)) == ["CREATE TABLE a(id INT)"]


def test_bundled_schema_defines_all_tables():
    stmts = list(_iter_sql_statements(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))))
    joined = "\n".join(stmts)

    for table in ("employees", "tasks", "payments"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in joined
    assert "completed_steps JSON NOT NULL" in joined
