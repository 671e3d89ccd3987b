from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_datetime, parse_iso_datetime
from ..core.enums import TaskStatus


@dataclass(frozen=True)
class StepRecord:
    """One entry of a task's append-only completion log."""

    step_name: str
    completed_by: int
    details: Optional[str]
    completed_at: datetime

    def to_document(self) -> dict:
        return {
            "stepName": self.step_name,
            "completedBy": self.completed_by,
            "details": self.details,
            "completedAt": format_datetime(self.completed_at),
        }

    @classmethod
    def from_document(cls, doc: dict) -> "StepRecord":
        return cls(
            step_name=doc["stepName"],
            completed_by=int(doc["completedBy"]),
            details=doc.get("details"),
            completed_at=parse_iso_datetime(doc["completedAt"]),
        )


@dataclass(frozen=True)
class Task:
    id: int
    customer_name: str
    customer_contact: str
    description: str
    current_step: Optional[str]
    assigned_to: int
    created_by: Optional[int]
    due_date: date
    status: TaskStatus
    completed_steps: tuple[StepRecord, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TaskFields:
    """Writable fields of a task, already validated. The step log is not one of them."""

    customer_name: str
    customer_contact: str
    description: str
    current_step: Optional[str]
    assigned_to: int
    created_by: Optional[int]
    due_date: date
    status: TaskStatus


@dataclass(frozen=True)
class TaskSummary:
    """Display summary used when a payment resolves its task reference."""

    id: int
    customer_name: str
    status: TaskStatus

    def as_dict(self) -> dict:
        return {"id": self.id, "customerName": self.customer_name, "status": self.status.value}
