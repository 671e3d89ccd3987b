from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, Type

from ..common.validators import optional_date, require_enum
from ..core.enums import PaymentStatus, TaskStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..employees.service import present_employee
from ..payments.repository import PaymentRepository
from ..payments.service import PaymentService
from ..tasks.repository import TaskRepository
from ..tasks.service import TaskService

TASK_CSV_FIELDS = [
    "id",
    "customerName",
    "customerContact",
    "description",
    "currentStep",
    "assignedTo",
    "dueDate",
    "status",
    "completedSteps",
]

PAYMENT_CSV_FIELDS = [
    "id",
    "taskId",
    "customerName",
    "assignedTo",
    "amountDue",
    "dueDate",
    "status",
    "collectedAmount",
    "collectedOn",
]


@dataclass(frozen=True)
class ReportFilter:
    status: Optional[Enum] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    @classmethod
    def parse(cls, args: Mapping[str, Any], status_cls: Type[Enum]) -> "ReportFilter":
        """Read ``status``, ``fromDate`` and ``toDate`` (``from``/``to`` also accepted)."""

        status = args.get("status")
        from_date = optional_date(args.get("fromDate", args.get("from")), "fromDate")
        to_date = optional_date(args.get("toDate", args.get("to")), "toDate")
        if from_date and to_date and from_date > to_date:
            raise ValidationError("fromDate must not be after toDate")
        return cls(
            status=require_enum(status, status_cls, "status") if status else None,
            from_date=from_date,
            to_date=to_date,
        )


def _name(summary: Optional[dict]) -> str:
    return summary["name"] if summary else ""


class ReportService:
    """Read-only aggregations over tasks, payments and employees."""

    def __init__(
        self,
        tasks: TaskRepository,
        payments: PaymentRepository,
        employees: EmployeeRepository,
        *,
        task_service: TaskService,
        payment_service: PaymentService,
    ):
        self._tasks = tasks
        self._payments = payments
        self._employees = employees
        self._task_service = task_service
        self._payment_service = payment_service

    def task_report(self, args: Mapping[str, Any]) -> list[dict]:
        f = ReportFilter.parse(args, TaskStatus)
        rows = self._tasks.list_filtered(status=f.status, from_date=f.from_date, to_date=f.to_date)
        return self._task_service.present_many(rows)

    def payment_report(self, args: Mapping[str, Any]) -> list[dict]:
        f = ReportFilter.parse(args, PaymentStatus)
        rows = self._payments.list_filtered(status=f.status, from_date=f.from_date, to_date=f.to_date)
        return self._payment_service.present_many(rows)

    def employee_report(self) -> list[dict]:
        out: list[dict] = []
        for e in self._employees.list_all():
            row = present_employee(e)
            row["taskCount"] = self._tasks.count_by_assignee(e.id)
            row["paymentCount"] = self._payments.count_by_assignee(e.id)
            out.append(row)
        return out

    def task_report_rows(self, args: Mapping[str, Any]) -> list[dict]:
        """Flat rows for CSV export."""

        return [
            {
                "id": t["id"],
                "customerName": t["customerName"],
                "customerContact": t["customerContact"],
                "description": t["description"],
                "currentStep": t["currentStep"] or "",
                "assignedTo": _name(t["assignedTo"]),
                "dueDate": t["dueDate"],
                "status": t["status"],
                "completedSteps": " > ".join(s["stepName"] for s in t["completedSteps"]),
            }
            for t in self.task_report(args)
        ]

    def payment_report_rows(self, args: Mapping[str, Any]) -> list[dict]:
        return [
            {
                "id": p["id"],
                "taskId": p["taskId"],
                "customerName": p["task"]["customerName"] if p["task"] else "",
                "assignedTo": _name(p["assignedTo"]),
                "amountDue": f"{p['amountDue']:.2f}",
                "dueDate": p["dueDate"],
                "status": p["status"],
                "collectedAmount": f"{p['collectedAmount']:.2f}" if p["collectedAmount"] is not None else "",
                "collectedOn": p["collectedOn"] or "",
            }
            for p in self.payment_report(args)
        ]
