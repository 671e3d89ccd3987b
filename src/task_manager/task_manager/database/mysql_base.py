from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.exceptions import PersistenceUnavailable, ValidationError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except (mysql_errors.InterfaceError, mysql_errors.OperationalError) as e:
        raise PersistenceUnavailable(f"Database unavailable: {e}") from e
    except mysql_errors.DataError as e:
        # value out of range or too long for its column (strict mode)
        conn.rollback()
        raise ValidationError(f"Invalid field value: {e.msg}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def load_json_array(value: Any) -> List[Any]:
    """Normalize a MySQL JSON column holding an array.

    mysql-connector can return JSON as str, bytes or bytearray depending on
    the connector implementation.
    """

    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    if not isinstance(value, list):
        raise TypeError(f"Expected JSON array, got {type(value)!r}")
    return value


def where_clause(clauses: List[str]) -> str:
    return " AND ".join(clauses) if clauses else "1=1"
