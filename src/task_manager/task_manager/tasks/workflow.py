from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..core.enums import TaskStatus
from ..core.exceptions import ValidationError
from .model import Task


@dataclass(frozen=True)
class StepOutcome:
    current_step: Optional[str]
    status: Optional[TaskStatus]


class TaskWorkflow:
    """Fixed, ordered list of step names a task goes through.

    When configured, steps must be completed exactly in this order. Without a
    workflow any step name is accepted and ordering is the caller's business.
    """

    def __init__(self, steps: Sequence[str]):
        cleaned = [s.strip() for s in steps if s and s.strip()]
        if not cleaned:
            raise ValueError("workflow needs at least one step")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("workflow step names must be unique")
        self._steps = tuple(cleaned)

    @classmethod
    def from_settings(cls, value: Any) -> Optional["TaskWorkflow"]:
        """Build from a comma separated string or a list; empty means no workflow."""

        if not value:
            return None
        if isinstance(value, str):
            value = value.split(",")
        steps = [str(s) for s in value]
        if not any(s.strip() for s in steps):
            return None
        return cls(steps)

    @property
    def steps(self) -> tuple[str, ...]:
        return self._steps

    def first_step(self) -> str:
        return self._steps[0]

    def next_step(self, task: Task) -> Optional[str]:
        done = len(task.completed_steps)
        return self._steps[done] if done < len(self._steps) else None

    def check(self, task: Task, step_name: str) -> StepOutcome:
        """Validate ``step_name`` against the task's log and return the state after it."""

        if step_name not in self._steps:
            raise ValidationError(f"Unknown step {step_name!r}")

        expected = self.next_step(task)
        if expected is None:
            raise ValidationError("All workflow steps are already completed")
        if step_name != expected:
            raise ValidationError(f"Step {step_name!r} is out of order, expected {expected!r}")

        index = self._steps.index(step_name)
        if index + 1 < len(self._steps):
            return StepOutcome(current_step=self._steps[index + 1], status=None)
        return StepOutcome(current_step=step_name, status=TaskStatus.COMPLETED)
