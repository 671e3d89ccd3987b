from __future__ import annotations

import pytest

from src.task_manager.task_manager.core.exceptions import AuthenticationError, NotFoundError, ValidationError


def test_create_hashes_password_and_never_returns_it(container, repos, alice):
    stored = repos.employees.get_by_id(alice["id"])

    assert stored.password_hash != "secret123"
    assert "password" not in alice
    assert "passwordHash" not in alice
    assert alice["employeeId"] == "E001"
    assert alice["role"] == "employee"


def test_get_returns_created_fields_except_password(container, alice):
    got = container.employee_service.get(alice["id"])

    assert got == alice
    assert all("password" not in key.lower() for key in got)


def test_list_is_stable_without_writes(container, alice, bob):
    first = container.employee_service.list()
    second = container.employee_service.list()

    assert first == second
    assert [e["employeeId"] for e in first] == ["E001", "E002"]


def test_role_defaults_to_employee(container):
    created = container.employee_service.create({"employeeId": "E010", "name": "Cara", "password": "secret123"})

    assert created["role"] == "employee"


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "No Id", "password": "secret123"},
        {"employeeId": "E009", "password": "secret123"},
        {"employeeId": "E009", "name": "No Password"},
        {"employeeId": "E009", "name": "Short", "password": "123"},
        {"employeeId": "E009", "name": "Bad Role", "password": "secret123", "role": "owner"},
    ],
)
def test_create_rejects_invalid_records(container, payload):
    with pytest.raises(ValidationError):
        container.employee_service.create(payload)


def test_create_rejects_duplicate_employee_id(container, alice):
    with pytest.raises(ValidationError):
        container.employee_service.create({"employeeId": "E001", "name": "Other", "password": "secret123"})


def test_update_rehashes_only_when_password_given(container, repos, alice):
    before = repos.employees.get_by_id(alice["id"]).password_hash

    container.employee_service.update(alice["id"], {"name": "Alice Smith"})
    assert repos.employees.get_by_id(alice["id"]).password_hash == before

    container.employee_service.update(alice["id"], {"password": "another-secret"})
    assert repos.employees.get_by_id(alice["id"]).password_hash != before
    assert container.auth_service.authenticate("E001", "another-secret")["name"] == "Alice Smith"


def test_update_revalidates_merged_record(container, alice, bob):
    with pytest.raises(ValidationError):
        container.employee_service.update(alice["id"], {"name": "  "})
    with pytest.raises(ValidationError):
        container.employee_service.update(alice["id"], {"employeeId": "E002"})


def test_update_and_delete_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.employee_service.update(99, {"name": "Ghost"})
    with pytest.raises(NotFoundError):
        container.employee_service.delete(99)
    with pytest.raises(NotFoundError):
        container.employee_service.get(99)


def test_authenticate(container, alice):
    assert container.auth_service.authenticate("E001", "secret123")["id"] == alice["id"]

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("E001", "wrong-password")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("E404", "secret123")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(None, None)
