from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.constants import MYSQL_DUPLICATE_KEY
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeFields, EmployeeSummary
from .repository import EmployeeRepository

_COLUMNS = "id, employee_id, name, role, password_hash, created_at, updated_at"


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        name=r["name"],
        role=Role(r["role"]),
        password_hash=r["password_hash"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _duplicate_guard(e: mysql_errors.IntegrityError, employee_id: str) -> ValidationError:
    if e.errno == MYSQL_DUPLICATE_KEY:
        return ValidationError(f"employeeId {employee_id!r} already exists")
    return ValidationError(str(e))


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (int(id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY id")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_summaries(self, ids: Iterable[int]) -> Mapping[int, EmployeeSummary]:
        wanted = sorted({int(i) for i in ids if i is not None})
        if not wanted:
            return {}
        placeholders = ",".join(["%s"] * len(wanted))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, employee_id, name FROM employees WHERE id IN ({placeholders})",
                tuple(wanted),
            )
            return {
                int(r["id"]): EmployeeSummary(id=int(r["id"]), employee_id=r["employee_id"], name=r["name"])
                for r in fetchall(cur)
            }

    def create(self, fields: EmployeeFields) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(employee_id, name, role, password_hash)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (fields.employee_id, fields.name, fields.role.value, fields.password_hash),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            raise _duplicate_guard(e, fields.employee_id) from e

    def update(self, id: int, fields: EmployeeFields) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET employee_id=%s, name=%s, role=%s, password_hash=%s
                    WHERE id=%s
                    """,
                    (fields.employee_id, fields.name, fields.role.value, fields.password_hash, int(id)),
                )
                # rowcount may be 0 for an unchanged row, so confirm the row exists
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM employees WHERE id=%s", (int(id),))
                return fetchone(cur) is not None
        except mysql_errors.IntegrityError as e:
            raise _duplicate_guard(e, fields.employee_id) from e

    def delete_by_id(self, id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(id),))
            return cur.rowcount > 0
