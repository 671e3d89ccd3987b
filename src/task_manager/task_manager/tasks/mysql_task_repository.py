from __future__ import annotations

import json
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_array, where_clause
from .model import StepRecord, Task, TaskFields, TaskSummary
from .repository import TaskRepository

_COLUMNS = """
    id, customer_name, customer_contact, description, current_step,
    assigned_to, created_by, due_date, status, completed_steps,
    created_at, updated_at
"""


def _row_to_task(r: dict) -> Task:
    return Task(
        id=int(r["id"]),
        customer_name=r["customer_name"],
        customer_contact=r["customer_contact"],
        description=r["description"],
        current_step=r.get("current_step"),
        assigned_to=int(r["assigned_to"]),
        created_by=int(r["created_by"]) if r.get("created_by") is not None else None,
        due_date=r["due_date"],
        status=TaskStatus(r["status"]),
        completed_steps=tuple(StepRecord.from_document(d) for d in load_json_array(r.get("completed_steps"))),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE id=%s", (int(id),))
            row = fetchone(cur)
            return _row_to_task(row) if row else None

    def list_all(self) -> Sequence[Task]:
        return self.list_filtered()

    def list_filtered(
        self,
        *,
        status: Optional[TaskStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[Task]:
        clauses: list[str] = []
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if from_date is not None:
            clauses.append("due_date >= %s")
            params.append(from_date)
        if to_date is not None:
            clauses.append("due_date <= %s")
            params.append(to_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE {where_clause(clauses)} ORDER BY id",
                tuple(params),
            )
            return [_row_to_task(r) for r in fetchall(cur)]

    def get_summaries(self, ids: Iterable[int]) -> Mapping[int, TaskSummary]:
        wanted = sorted({int(i) for i in ids if i is not None})
        if not wanted:
            return {}
        placeholders = ",".join(["%s"] * len(wanted))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, customer_name, status FROM tasks WHERE id IN ({placeholders})",
                tuple(wanted),
            )
            return {
                int(r["id"]): TaskSummary(id=int(r["id"]), customer_name=r["customer_name"], status=TaskStatus(r["status"]))
                for r in fetchall(cur)
            }

    def create(self, fields: TaskFields) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(
                    customer_name, customer_contact, description, current_step,
                    assigned_to, created_by, due_date, status, completed_steps
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,JSON_ARRAY())
                """,
                (
                    fields.customer_name,
                    fields.customer_contact,
                    fields.description,
                    fields.current_step,
                    fields.assigned_to,
                    fields.created_by,
                    fields.due_date,
                    fields.status.value,
                ),
            )
            return int(cur.lastrowid)

    def update(self, id: int, fields: TaskFields) -> bool:
        # completed_steps is left alone; only append_step writes it
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET customer_name=%s, customer_contact=%s, description=%s, current_step=%s,
                    assigned_to=%s, created_by=%s, due_date=%s, status=%s
                WHERE id=%s
                """,
                (
                    fields.customer_name,
                    fields.customer_contact,
                    fields.description,
                    fields.current_step,
                    fields.assigned_to,
                    fields.created_by,
                    fields.due_date,
                    fields.status.value,
                    int(id),
                ),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM tasks WHERE id=%s", (int(id),))
            return fetchone(cur) is not None

    def append_step(
        self,
        id: int,
        step: StepRecord,
        *,
        status: Optional[TaskStatus] = None,
        current_step: Optional[str] = None,
        expected_length: Optional[int] = None,
    ) -> bool:
        # Single-statement append: concurrent appends serialize on the row lock.
        sql = """
            UPDATE tasks
            SET completed_steps = JSON_ARRAY_APPEND(completed_steps, '$', CAST(%s AS JSON)),
                status = COALESCE(%s, status),
                current_step = COALESCE(%s, current_step)
            WHERE id=%s
        """
        params: list[object] = [
            json.dumps(step.to_document()),
            status.value if status else None,
            current_step,
            int(id),
        ]
        if expected_length is not None:
            sql += " AND JSON_LENGTH(completed_steps)=%s"
            params.append(int(expected_length))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return cur.rowcount > 0

    def delete_by_id(self, id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s", (int(id),))
            return cur.rowcount > 0

    def count_by_assignee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM tasks WHERE assigned_to=%s", (int(employee_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def list_ids_by_assignee(self, employee_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM tasks WHERE assigned_to=%s ORDER BY id", (int(employee_id),))
            return [int(r["id"]) for r in fetchall(cur)]
