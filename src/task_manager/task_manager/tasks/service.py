from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import format_date, format_datetime, now_local
from ..common.validators import (
    optional_datetime,
    optional_id,
    optional_text,
    require_date,
    require_enum,
    require_id,
    require_non_empty,
)
from ..core.constants import MAX_TEXT_LENGTH
from ..core.enums import TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import EmployeeSummary
from ..employees.repository import EmployeeRepository
from ..references.service import ReferenceIntegrity
from .model import StepRecord, Task, TaskFields
from .repository import TaskRepository
from .workflow import TaskWorkflow

logger = logging.getLogger(__name__)


def _summary(people: Mapping[int, EmployeeSummary], id: Optional[int]) -> Optional[dict]:
    if id is None:
        return None
    found = people.get(id)
    return found.as_dict() if found else None


def task_people(tasks: Sequence[Task]) -> set[int]:
    """Every employee id a list of tasks refers to."""

    ids: set[int] = set()
    for t in tasks:
        ids.add(t.assigned_to)
        if t.created_by is not None:
            ids.add(t.created_by)
        ids.update(s.completed_by for s in t.completed_steps)
    return ids


def present_task(task: Task, people: Mapping[int, EmployeeSummary]) -> dict:
    """Public view of a task with employee references resolved.

    A reference to a deleted employee resolves to ``None``; the raw id stays
    available under ``...Id``.
    """

    return {
        "id": task.id,
        "customerName": task.customer_name,
        "customerContact": task.customer_contact,
        "description": task.description,
        "currentStep": task.current_step,
        "assignedTo": _summary(people, task.assigned_to),
        "assignedToId": task.assigned_to,
        "createdBy": _summary(people, task.created_by),
        "createdById": task.created_by,
        "dueDate": format_date(task.due_date),
        "status": task.status.value,
        "completedSteps": [
            {
                "stepName": s.step_name,
                "completedBy": _summary(people, s.completed_by),
                "completedById": s.completed_by,
                "details": s.details,
                "completedAt": format_datetime(s.completed_at),
            }
            for s in task.completed_steps
        ],
        "createdAt": format_datetime(task.created_at),
        "updatedAt": format_datetime(task.updated_at),
    }


class TaskService:
    """Use case: task lifecycle, including the step completion log."""

    def __init__(
        self,
        tasks: TaskRepository,
        employees: EmployeeRepository,
        *,
        integrity: Optional[ReferenceIntegrity] = None,
        workflow: Optional[TaskWorkflow] = None,
    ):
        self._tasks = tasks
        self._employees = employees
        self._integrity = integrity
        self._workflow = workflow

    def _require(self, id: int) -> Task:
        task = self._tasks.get_by_id(int(id))
        if not task:
            raise NotFoundError("Task not found")
        return task

    def present_many(self, tasks: Sequence[Task]) -> list[dict]:
        people = self._employees.get_summaries(task_people(tasks))
        return [present_task(t, people) for t in tasks]

    def _present(self, task: Task) -> dict:
        return self.present_many([task])[0]

    def _require_employee(self, id: Any, field_name: str) -> int:
        ident = require_id(id, field_name)
        if not self._employees.get_summaries([ident]):
            raise ValidationError(f"{field_name} refers to an unknown employee")
        return ident

    def create(self, data: Mapping[str, Any]) -> dict:
        created_by = optional_id(data.get("createdBy"), "createdBy")
        if created_by is not None:
            created_by = self._require_employee(created_by, "createdBy")

        current_step = optional_text(data.get("currentStep"), "currentStep", MAX_TEXT_LENGTH)
        if current_step is None and self._workflow:
            current_step = self._workflow.first_step()

        fields = TaskFields(
            customer_name=require_non_empty(data.get("customerName"), "customerName", MAX_TEXT_LENGTH),
            customer_contact=require_non_empty(data.get("customerContact"), "customerContact", MAX_TEXT_LENGTH),
            description=require_non_empty(data.get("description"), "description"),
            current_step=current_step,
            assigned_to=self._require_employee(data.get("assignedTo"), "assignedTo"),
            created_by=created_by,
            due_date=require_date(data.get("dueDate"), "dueDate"),
            status=require_enum(data.get("status") or TaskStatus.PENDING.value, TaskStatus, "status"),
        )

        new_id = self._tasks.create(fields)
        logger.info("task %s created for employee %s", new_id, fields.assigned_to)
        return self._present(self._require(new_id))

    def list(self) -> list[dict]:
        return self.present_many(self._tasks.list_all())

    def get(self, id: int) -> dict:
        return self._present(self._require(id))

    def update(self, id: int, data: Mapping[str, Any]) -> dict:
        """Merge ``data`` into the stored task and re-validate the result.

        Read-only keys (id, completedSteps, timestamps) are ignored.
        """

        current = self._require(id)

        assigned_to = current.assigned_to
        if "assignedTo" in data:
            assigned_to = self._require_employee(data.get("assignedTo"), "assignedTo")
        created_by = current.created_by
        if "createdBy" in data:
            created_by = optional_id(data.get("createdBy"), "createdBy")
            if created_by is not None:
                created_by = self._require_employee(created_by, "createdBy")

        def _text(key: str, value: str, max_len: Optional[int] = MAX_TEXT_LENGTH) -> str:
            return require_non_empty(data.get(key), key, max_len) if key in data else value

        fields = TaskFields(
            customer_name=_text("customerName", current.customer_name),
            customer_contact=_text("customerContact", current.customer_contact),
            description=_text("description", current.description, None),
            current_step=(
                optional_text(data.get("currentStep"), "currentStep", MAX_TEXT_LENGTH)
                if "currentStep" in data
                else current.current_step
            ),
            assigned_to=assigned_to,
            created_by=created_by,
            due_date=require_date(data.get("dueDate"), "dueDate") if "dueDate" in data else current.due_date,
            status=require_enum(data.get("status"), TaskStatus, "status") if "status" in data else current.status,
        )

        if not self._tasks.update(current.id, fields):
            raise NotFoundError("Task not found")
        return self._present(self._require(current.id))

    def complete_step(self, id: int, data: Mapping[str, Any]) -> dict:
        """Append one step record to the task's completion log.

        Entries are never removed or reordered. ``completedAt`` defaults to now
        and does not affect the position of the entry.

        ``completedBy`` is parsed as an id but not looked up in the directory,
        so the log can record an employee who has since been removed.
        """

        step = StepRecord(
            step_name=require_non_empty(data.get("stepName"), "stepName"),
            completed_by=require_id(data.get("completedBy"), "completedBy"),
            details=optional_text(data.get("details"), "details"),
            completed_at=optional_datetime(data.get("completedAt"), "completedAt") or now_local(),
        )
        status = require_enum(data.get("status"), TaskStatus, "status") if data.get("status") else None

        if self._workflow is None:
            if not self._tasks.append_step(int(id), step, status=status):
                raise NotFoundError("Task not found")
        else:
            task = self._require(id)
            outcome = self._workflow.check(task, step.step_name)
            appended = self._tasks.append_step(
                task.id,
                step,
                status=status or outcome.status,
                current_step=outcome.current_step,
                expected_length=len(task.completed_steps),
            )
            if not appended:
                self._require(id)
                raise ValidationError("Task steps changed concurrently, please retry")

        logger.info("task %s: step %r completed by %s", id, step.step_name, step.completed_by)
        return self._present(self._require(id))

    def delete(self, id: int) -> None:
        task = self._require(id)
        plan = self._integrity.plan_task_delete(task.id) if self._integrity else None

        if not self._tasks.delete_by_id(task.id):
            raise NotFoundError("Task not found")
        logger.info("task %s deleted", task.id)

        if plan is not None:
            self._integrity.apply(plan)
