# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.task_manager.task_manager.container import assemble
from src.task_manager.task_manager.main import create_app

from .fakes import FakeConnection, InMemoryEmployees, InMemoryPayments, InMemoryTasks


@pytest.fixture()
def repos() -> SimpleNamespace:
    return SimpleNamespace(
        employees=InMemoryEmployees(),
        tasks=InMemoryTasks(),
        payments=InMemoryPayments(),
    )


@pytest.fixture()
def make_container(repos):
    """Container over in-memory repositories; policies/workflow can be overridden per test."""

    def _make(conn=None, **overrides):
        return assemble(
            conn or FakeConnection(),
            employees_repo=repos.employees,
            tasks_repo=repos.tasks,
            payments_repo=repos.payments,
            **overrides,
        )

    return _make


@pytest.fixture()
def container(make_container):
    return make_container()


@pytest.fixture()
def client(container):
    app = create_app(settings_module="config.testing", container=container)
    return app.test_client()


@pytest.fixture()
def alice(container) -> dict:
    return container.employee_service.create(
        {"employeeId": "E001", "name": "Alice", "role": "employee", "password": "secret123"}
    )


@pytest.fixture()
def bob(container) -> dict:
    return container.employee_service.create(
        {"employeeId": "E002", "name": "Bob", "role": "admin", "password": "secret456"}
    )
