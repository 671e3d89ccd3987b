from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import format_date, format_datetime
from ..common.validators import (
    optional_amount,
    optional_date,
    optional_text,
    require_amount,
    require_date,
    require_enum,
    require_id,
)
from ..core.enums import PaymentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import EmployeeSummary
from ..employees.repository import EmployeeRepository
from ..tasks.model import TaskSummary
from ..tasks.repository import TaskRepository
from .model import Payment, PaymentFields
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def present_payment(
    payment: Payment,
    people: Mapping[int, EmployeeSummary],
    tasks: Mapping[int, TaskSummary],
) -> dict:
    assignee = people.get(payment.assigned_to)
    task = tasks.get(payment.task_id)
    return {
        "id": payment.id,
        "taskId": payment.task_id,
        "task": task.as_dict() if task else None,
        "assignedTo": assignee.as_dict() if assignee else None,
        "assignedToId": payment.assigned_to,
        "amountDue": _money(payment.amount_due),
        "dueDate": format_date(payment.due_date),
        "status": payment.status.value,
        "collectedAmount": _money(payment.collected_amount),
        "collectedOn": format_date(payment.collected_on),
        "notes": payment.notes,
        "createdAt": format_datetime(payment.created_at),
        "updatedAt": format_datetime(payment.updated_at),
    }


class PaymentService:
    """Use case: payment obligations and their collection.

    Collection is a plain update of status, collectedAmount and collectedOn.
    """

    def __init__(self, payments: PaymentRepository, tasks: TaskRepository, employees: EmployeeRepository):
        self._payments = payments
        self._tasks = tasks
        self._employees = employees

    def _require(self, id: int) -> Payment:
        payment = self._payments.get_by_id(int(id))
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    def present_many(self, payments: Sequence[Payment]) -> list[dict]:
        people = self._employees.get_summaries({p.assigned_to for p in payments})
        tasks = self._tasks.get_summaries({p.task_id for p in payments})
        return [present_payment(p, people, tasks) for p in payments]

    def _present(self, payment: Payment) -> dict:
        return self.present_many([payment])[0]

    def _require_task(self, value: Any) -> int:
        task_id = require_id(value, "taskId")
        if not self._tasks.get_summaries([task_id]):
            raise ValidationError("taskId refers to an unknown task")
        return task_id

    def _require_employee(self, value: Any) -> int:
        employee_id = require_id(value, "assignedTo")
        if not self._employees.get_summaries([employee_id]):
            raise ValidationError("assignedTo refers to an unknown employee")
        return employee_id

    def create(self, data: Mapping[str, Any]) -> dict:
        fields = PaymentFields(
            task_id=self._require_task(data.get("taskId")),
            assigned_to=self._require_employee(data.get("assignedTo")),
            amount_due=require_amount(data.get("amountDue"), "amountDue"),
            due_date=require_date(data.get("dueDate"), "dueDate"),
            status=require_enum(data.get("status") or PaymentStatus.PENDING.value, PaymentStatus, "status"),
            collected_amount=optional_amount(data.get("collectedAmount"), "collectedAmount"),
            collected_on=optional_date(data.get("collectedOn"), "collectedOn"),
            notes=optional_text(data.get("notes"), "notes"),
        )
        new_id = self._payments.create(fields)
        logger.info("payment %s created for task %s", new_id, fields.task_id)
        return self._present(self._require(new_id))

    def list(self) -> list[dict]:
        return self.present_many(self._payments.list_all())

    def get(self, id: int) -> dict:
        return self._present(self._require(id))

    def update(self, id: int, data: Mapping[str, Any]) -> dict:
        current = self._require(id)

        fields = PaymentFields(
            task_id=self._require_task(data.get("taskId")) if "taskId" in data else current.task_id,
            assigned_to=self._require_employee(data.get("assignedTo")) if "assignedTo" in data else current.assigned_to,
            amount_due=require_amount(data.get("amountDue"), "amountDue") if "amountDue" in data else current.amount_due,
            due_date=require_date(data.get("dueDate"), "dueDate") if "dueDate" in data else current.due_date,
            status=require_enum(data.get("status"), PaymentStatus, "status") if "status" in data else current.status,
            collected_amount=(
                optional_amount(data.get("collectedAmount"), "collectedAmount")
                if "collectedAmount" in data
                else current.collected_amount
            ),
            collected_on=(
                optional_date(data.get("collectedOn"), "collectedOn") if "collectedOn" in data else current.collected_on
            ),
            notes=optional_text(data.get("notes"), "notes") if "notes" in data else current.notes,
        )

        if not self._payments.update(current.id, fields):
            raise NotFoundError("Payment not found")
        if fields.status == PaymentStatus.COLLECTED and current.status != PaymentStatus.COLLECTED:
            logger.info("payment %s collected (%s)", current.id, fields.collected_amount)
        return self._present(self._require(current.id))

    def delete(self, id: int) -> None:
        payment = self._require(id)
        if not self._payments.delete_by_id(payment.id):
            raise NotFoundError("Payment not found")
        logger.info("payment %s deleted", payment.id)
