from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..core.enums import TaskStatus
from .model import StepRecord, Task, TaskFields, TaskSummary


class TaskRepository(Protocol):
    def get_by_id(self, id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Task]:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        status: Optional[TaskStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[Task]:
        """Equality on status, inclusive range on due_date; ``None`` leaves a bound open."""

        raise NotImplementedError

    def get_summaries(self, ids: Iterable[int]) -> Mapping[int, TaskSummary]:
        raise NotImplementedError

    def create(self, fields: TaskFields) -> int:
        raise NotImplementedError

    def update(self, id: int, fields: TaskFields) -> bool:
        raise NotImplementedError

    def append_step(
        self,
        id: int,
        step: StepRecord,
        *,
        status: Optional[TaskStatus] = None,
        current_step: Optional[str] = None,
        expected_length: Optional[int] = None,
    ) -> bool:
        """Atomically append ``step`` to the task's log.

        With ``expected_length`` the append only happens if the log still has
        that many entries. Returns False when nothing was appended.
        """

        raise NotImplementedError

    def delete_by_id(self, id: int) -> bool:
        raise NotImplementedError

    def count_by_assignee(self, employee_id: int) -> int:
        raise NotImplementedError

    def list_ids_by_assignee(self, employee_id: int) -> Sequence[int]:
        raise NotImplementedError
