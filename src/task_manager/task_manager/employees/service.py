from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import format_datetime
from ..common.validators import require_enum, require_min_length, require_non_empty
from ..core.constants import MAX_EMPLOYEE_ID_LENGTH, MAX_TEXT_LENGTH, MIN_PASSWORD_LENGTH, PASSWORD_HASH_METHOD
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..references.service import ReferenceIntegrity
from .model import Employee, EmployeeFields
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def present_employee(employee: Employee) -> dict:
    """Public view of an employee. The password hash is never included."""

    return {
        "id": employee.id,
        "employeeId": employee.employee_id,
        "name": employee.name,
        "role": employee.role.value,
        "createdAt": format_datetime(employee.created_at),
        "updatedAt": format_datetime(employee.updated_at),
    }


def _hash_password(password: Any) -> str:
    password = require_min_length(password, "password", MIN_PASSWORD_LENGTH)
    return generate_password_hash(password, method=PASSWORD_HASH_METHOD)


class AuthService:
    """Use case: credential check for login. No session or token is issued."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, employee_id: Any, password: Any) -> dict:
        if not isinstance(employee_id, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid employeeId or password")

        employee = self._employees.get_by_employee_id(employee_id.strip())
        if not employee:
            raise AuthenticationError("Invalid employeeId or password")

        try:
            ok = check_password_hash(employee.password_hash, password)
        except ValueError:
            # unknown hash format, e.g. a placeholder written by hand
            ok = False
        if not ok:
            raise AuthenticationError("Invalid employeeId or password")

        logger.info("employee %s logged in", employee.employee_id)
        return present_employee(employee)


class EmployeeService:
    """Use case: manage the employee directory."""

    def __init__(self, employees: EmployeeRepository, integrity: Optional[ReferenceIntegrity] = None):
        self._employees = employees
        self._integrity = integrity

    def _require(self, id: int) -> Employee:
        employee = self._employees.get_by_id(int(id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create(self, data: Mapping[str, Any]) -> dict:
        if data.get("password") is None:
            raise ValidationError("password is required")

        fields = EmployeeFields(
            employee_id=require_non_empty(data.get("employeeId"), "employeeId", MAX_EMPLOYEE_ID_LENGTH),
            name=require_non_empty(data.get("name"), "name", MAX_TEXT_LENGTH),
            role=require_enum(data.get("role") or Role.EMPLOYEE.value, Role, "role"),
            password_hash=_hash_password(data.get("password")),
        )
        if self._employees.get_by_employee_id(fields.employee_id):
            raise ValidationError(f"employeeId {fields.employee_id!r} already exists")

        new_id = self._employees.create(fields)
        logger.info("employee %s created (id=%s)", fields.employee_id, new_id)
        return present_employee(self._require(new_id))

    def list(self) -> list[dict]:
        return [present_employee(e) for e in self._employees.list_all()]

    def get(self, id: int) -> dict:
        return present_employee(self._require(id))

    def update(self, id: int, data: Mapping[str, Any]) -> dict:
        current = self._require(id)

        employee_id = current.employee_id
        if "employeeId" in data:
            employee_id = require_non_empty(data.get("employeeId"), "employeeId", MAX_EMPLOYEE_ID_LENGTH)
        name = current.name
        if "name" in data:
            name = require_non_empty(data.get("name"), "name", MAX_TEXT_LENGTH)
        role = current.role
        if "role" in data:
            role = require_enum(data.get("role"), Role, "role")
        password_hash = current.password_hash
        if "password" in data:
            password_hash = _hash_password(data.get("password"))

        if employee_id != current.employee_id:
            other = self._employees.get_by_employee_id(employee_id)
            if other and other.id != current.id:
                raise ValidationError(f"employeeId {employee_id!r} already exists")

        fields = EmployeeFields(employee_id=employee_id, name=name, role=role, password_hash=password_hash)
        if not self._employees.update(current.id, fields):
            raise NotFoundError("Employee not found")
        return present_employee(self._require(current.id))

    def delete(self, id: int) -> None:
        employee = self._require(id)
        plan = self._integrity.plan_employee_delete(employee.id) if self._integrity else None

        if not self._employees.delete_by_id(employee.id):
            raise NotFoundError("Employee not found")
        logger.info("employee %s deleted (id=%s)", employee.employee_id, employee.id)

        if plan is not None:
            self._integrity.apply(plan)
