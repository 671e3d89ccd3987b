from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Directory record. ``password_hash`` never leaves the service layer."""

    id: int
    employee_id: str
    name: str
    role: Role
    password_hash: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeeFields:
    """Writable fields of an employee, already validated."""

    employee_id: str
    name: str
    role: Role
    password_hash: str


@dataclass(frozen=True)
class EmployeeSummary:
    """Display summary used when resolving references to an employee."""

    id: int
    employee_id: str
    name: str

    def as_dict(self) -> dict:
        return {"id": self.id, "employeeId": self.employee_id, "name": self.name}
