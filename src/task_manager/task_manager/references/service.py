from __future__ import annotations

import logging

from ..core.enums import DeletePolicy
from ..core.exceptions import ValidationError
from ..payments.repository import PaymentRepository
from ..tasks.repository import TaskRepository
from .policy import CascadePlan, DeletePolicies

logger = logging.getLogger(__name__)


class ReferenceIntegrity:
    """Applies the configured delete policy to records referencing a deleted one.

    ``plan_*`` runs before the delete and raises ValidationError when a
    ``restrict`` policy blocks it. ``apply`` runs after the delete and removes
    ``cascade`` dependents. With ``keep`` the references are left dangling.
    """

    def __init__(self, tasks: TaskRepository, payments: PaymentRepository, policies: DeletePolicies | None = None):
        self._tasks = tasks
        self._payments = payments
        self._policies = policies or DeletePolicies()

    @property
    def policies(self) -> DeletePolicies:
        return self._policies

    def plan_employee_delete(self, employee_id: int) -> CascadePlan:
        p = self._policies
        if p.task_assignee == DeletePolicy.RESTRICT and self._tasks.count_by_assignee(employee_id) > 0:
            raise ValidationError("Employee is still assigned to tasks")
        if p.payment_assignee == DeletePolicy.RESTRICT and self._payments.count_by_assignee(employee_id) > 0:
            raise ValidationError("Employee is still assigned to payments")

        task_ids: tuple[int, ...] = ()
        payment_tasks: tuple[int, ...] = ()
        if p.task_assignee == DeletePolicy.CASCADE:
            task_ids = tuple(self._tasks.list_ids_by_assignee(employee_id))
            payment_tasks = self._plan_tasks(task_ids)

        return CascadePlan(
            task_ids=task_ids,
            payment_assignee=employee_id if p.payment_assignee == DeletePolicy.CASCADE else None,
            payment_tasks=payment_tasks,
        )

    def plan_task_delete(self, task_id: int) -> CascadePlan:
        return CascadePlan(payment_tasks=self._plan_tasks((task_id,)))

    def _plan_tasks(self, task_ids: tuple[int, ...]) -> tuple[int, ...]:
        p = self._policies
        if p.payment_task == DeletePolicy.RESTRICT:
            for task_id in task_ids:
                if self._payments.count_by_task(task_id) > 0:
                    raise ValidationError(f"Task {task_id} still has payments")
        if p.payment_task == DeletePolicy.CASCADE:
            return task_ids
        return ()

    def apply(self, plan: CascadePlan) -> None:
        for task_id in plan.task_ids:
            self._tasks.delete_by_id(task_id)
        if plan.task_ids:
            logger.info("cascade: deleted %d task(s)", len(plan.task_ids))

        if plan.payment_assignee is not None:
            n = self._payments.delete_by_assignee(plan.payment_assignee)
            logger.info("cascade: deleted %d payment(s) of employee %s", n, plan.payment_assignee)

        for task_id in plan.payment_tasks:
            n = self._payments.delete_by_task(task_id)
            if n:
                logger.info("cascade: deleted %d payment(s) of task %s", n, task_id)
