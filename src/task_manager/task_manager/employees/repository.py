from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from .model import Employee, EmployeeFields, EmployeeSummary


class EmployeeRepository(Protocol):
    """Repository interface for the employee directory.

    Note: create/update raise ValidationError on a duplicate ``employee_id``.
    """

    def get_by_id(self, id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_summaries(self, ids: Iterable[int]) -> Mapping[int, EmployeeSummary]:
        """Return summaries for the ids that exist; missing ids are left out."""

        raise NotImplementedError

    def create(self, fields: EmployeeFields) -> int:
        raise NotImplementedError

    def update(self, id: int, fields: EmployeeFields) -> bool:
        raise NotImplementedError

    def delete_by_id(self, id: int) -> bool:
        raise NotImplementedError
