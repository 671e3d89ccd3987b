from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .database.connection import DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .references.policy import DeletePolicies
from .references.service import ReferenceIntegrity
from .reports.service import ReportService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .tasks.workflow import TaskWorkflow


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: EmployeeRepository
    tasks_repo: TaskRepository
    payments_repo: PaymentRepository

    auth_service: AuthService
    employee_service: EmployeeService
    task_service: TaskService
    payment_service: PaymentService
    report_service: ReportService


def assemble(
    conn: DatabaseConnection,
    *,
    employees_repo: EmployeeRepository,
    tasks_repo: TaskRepository,
    payments_repo: PaymentRepository,
    policies: Optional[DeletePolicies] = None,
    workflow: Optional[TaskWorkflow] = None,
) -> Container:
    """Wire services around the given repositories."""

    integrity = ReferenceIntegrity(tasks_repo, payments_repo, policies)
    task_service = TaskService(tasks_repo, employees_repo, integrity=integrity, workflow=workflow)
    payment_service = PaymentService(payments_repo, tasks_repo, employees_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        tasks_repo=tasks_repo,
        payments_repo=payments_repo,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo, integrity),
        task_service=task_service,
        payment_service=payment_service,
        report_service=ReportService(
            tasks_repo,
            payments_repo,
            employees_repo,
            task_service=task_service,
            payment_service=payment_service,
        ),
    )


def build_container(conn: DatabaseConnection, *, settings: Optional[Any] = None) -> Container:
    """MySQL-backed container around an already constructed DB handle."""

    return assemble(
        conn,
        employees_repo=MySQLEmployeeRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        policies=DeletePolicies.from_settings(settings) if settings is not None else None,
        workflow=TaskWorkflow.from_settings(getattr(settings, "TASK_WORKFLOW_STEPS", None)),
    )
