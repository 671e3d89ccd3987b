from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import Payment, PaymentFields
from .repository import PaymentRepository

_COLUMNS = """
    id, task_id, assigned_to, amount_due, due_date, status,
    collected_amount, collected_on, notes, created_at, updated_at
"""


def _row_to_payment(r: dict) -> Payment:
    collected = r.get("collected_amount")
    return Payment(
        id=int(r["id"]),
        task_id=int(r["task_id"]),
        assigned_to=int(r["assigned_to"]),
        amount_due=Decimal(str(r["amount_due"])),
        due_date=r["due_date"],
        status=PaymentStatus(r["status"]),
        collected_amount=Decimal(str(collected)) if collected is not None else None,
        collected_on=r.get("collected_on"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _params(fields: PaymentFields) -> tuple:
    return (
        fields.task_id,
        fields.assigned_to,
        fields.amount_due,
        fields.due_date,
        fields.status.value,
        fields.collected_amount,
        fields.collected_on,
        fields.notes,
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments WHERE id=%s", (int(id),))
            row = fetchone(cur)
            return _row_to_payment(row) if row else None

    def list_all(self) -> Sequence[Payment]:
        return self.list_filtered()

    def list_filtered(
        self,
        *,
        status: Optional[PaymentStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[Payment]:
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
                f"SELECT {_COLUMNS} FROM payments WHERE {where_clause(clauses)} ORDER BY id",
                tuple(params),
            )
            return [_row_to_payment(r) for r in fetchall(cur)]

    def create(self, fields: PaymentFields) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(
                    task_id, assigned_to, amount_due, due_date, status,
                    collected_amount, collected_on, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(fields),
            )
            return int(cur.lastrowid)

    def update(self, id: int, fields: PaymentFields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payments
                SET task_id=%s, assigned_to=%s, amount_due=%s, due_date=%s, status=%s,
                    collected_amount=%s, collected_on=%s, notes=%s
                WHERE id=%s
                """,
                _params(fields) + (int(id),),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM payments WHERE id=%s", (int(id),))
            return fetchone(cur) is not None

    def delete_by_id(self, id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE id=%s", (int(id),))
            return cur.rowcount > 0

    def _count(self, column: str, value: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM payments WHERE {column}=%s", (int(value),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def count_by_assignee(self, employee_id: int) -> int:
        return self._count("assigned_to", employee_id)

    def count_by_task(self, task_id: int) -> int:
        return self._count("task_id", task_id)

    def delete_by_assignee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE assigned_to=%s", (int(employee_id),))
            return int(cur.rowcount)

    def delete_by_task(self, task_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE task_id=%s", (int(task_id),))
            return int(cur.rowcount)
