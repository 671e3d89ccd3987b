from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..common.validators import require_enum
from ..core.enums import DeletePolicy


@dataclass(frozen=True)
class DeletePolicies:
    """Delete policy per reference, decided by configuration.

    ``task_assignee``: Task.assignedTo -> Employee
    ``payment_assignee``: Payment.assignedTo -> Employee
    ``payment_task``: Payment.taskId -> Task
    """

    task_assignee: DeletePolicy = DeletePolicy.KEEP
    payment_assignee: DeletePolicy = DeletePolicy.KEEP
    payment_task: DeletePolicy = DeletePolicy.KEEP

    @classmethod
    def from_settings(cls, settings: Any) -> "DeletePolicies":
        def _read(name: str) -> DeletePolicy:
            return require_enum(getattr(settings, name, DeletePolicy.KEEP.value), DeletePolicy, name)

        return cls(
            task_assignee=_read("DELETE_POLICY_TASK_ASSIGNEE"),
            payment_assignee=_read("DELETE_POLICY_PAYMENT_ASSIGNEE"),
            payment_task=_read("DELETE_POLICY_PAYMENT_TASK"),
        )


@dataclass(frozen=True)
class CascadePlan:
    """Work left to do after the parent record is gone."""

    task_ids: tuple[int, ...] = ()
    payment_assignee: int | None = None
    payment_tasks: tuple[int, ...] = ()
