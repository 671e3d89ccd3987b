from __future__ import annotations

import pytest
from mysql.connector import errors as mysql_errors

from src.task_manager.task_manager.container import assemble
from src.task_manager.task_manager.core.enums import ConnectionState
from src.task_manager.task_manager.core.exceptions import PersistenceUnavailable
from src.task_manager.task_manager.main import create_app
from src.task_manager.task_manager.tasks.mysql_task_repository import MySQLTaskRepository

from .fakes import FakeConnection, task_payload


@pytest.fixture()
def employee(client) -> dict:
    resp = client.post(
        "/api/employees", json={"employeeId": "E001", "name": "Alice", "password": "secret123"}
    )
    assert resp.status_code == 201
    return resp.get_json()


def test_health_reports_db_status(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "API is running now", "dbStatus": "connected"}


def test_health_when_disconnected(make_container):
    container = make_container(conn=FakeConnection(ConnectionState.DISCONNECTED))
    client = create_app(settings_module="config.testing", container=container).test_client()

    assert client.get("/").get_json()["dbStatus"] == "disconnected"


def test_employee_crud(client, employee):
    assert "password" not in employee
    assert client.get(f"/api/employees/{employee['id']}").get_json() == employee
    assert len(client.get("/api/employees").get_json()) == 1

    resp = client.put(f"/api/employees/{employee['id']}", json={"role": "admin"})
    assert resp.status_code == 200
    assert resp.get_json()["role"] == "admin"

    resp = client.delete(f"/api/employees/{employee['id']}")
    assert resp.get_json() == {"message": "Employee deleted successfully"}
    assert client.get(f"/api/employees/{employee['id']}").status_code == 404


def test_validation_errors_are_400(client):
    resp = client.post("/api/employees", json={"employeeId": "E001", "name": "Alice", "password": "123"})

    assert resp.status_code == 400
    assert "password" in resp.get_json()["error"]

    assert client.post("/api/employees", data="not json", content_type="text/plain").status_code == 400


def test_login(client, employee):
    ok = client.post("/api/login", json={"employeeId": "E001", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.get_json()["employee"]["employeeId"] == "E001"

    bad = client.post("/api/login", json={"employeeId": "E001", "password": "wrong-one"})
    assert bad.status_code == 401
    assert bad.get_json() == {"error": "Invalid employeeId or password"}


def test_task_lifecycle(client, employee):
    resp = client.post("/api/tasks", json=task_payload(employee["id"]))
    assert resp.status_code == 201
    task = resp.get_json()
    assert task["completedSteps"] == []

    resp = client.post(
        f"/api/tasks/{task['id']}/steps",
        json={"stepName": "survey", "completedBy": employee["id"], "details": "site visited"},
    )
    assert resp.status_code == 200
    assert [s["stepName"] for s in resp.get_json()["completedSteps"]] == ["survey"]

    assert client.post(f"/api/tasks/{task['id']}/steps", json={"stepName": "x"}).status_code == 400
    assert client.post("/api/tasks/999/steps", json={"stepName": "x", "completedBy": 1}).status_code == 404

    resp = client.put(f"/api/tasks/{task['id']}", json={"status": "completed"})
    assert resp.get_json()["status"] == "completed"

    assert client.delete(f"/api/tasks/{task['id']}").get_json() == {"message": "Task deleted successfully"}
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_payment_lifecycle(client, employee):
    task = client.post("/api/tasks", json=task_payload(employee["id"])).get_json()

    resp = client.post(
        "/api/payments",
        json={"taskId": task["id"], "assignedTo": employee["id"], "amountDue": "99.90", "dueDate": "2026-03-31"},
    )
    assert resp.status_code == 201
    payment = resp.get_json()
    assert payment["amountDue"] == 99.9

    resp = client.put(f"/api/payments/{payment['id']}", json={"status": "Collected", "collectedAmount": 99.9})
    assert resp.get_json()["status"] == "Collected"
    assert len(client.get("/api/payments").get_json()) == 1

    assert client.delete(f"/api/payments/{payment['id']}").status_code == 200
    assert client.get(f"/api/payments/{payment['id']}").status_code == 404


def test_reports(client, employee):
    client.post("/api/tasks", json=task_payload(employee["id"], dueDate="2026-03-01"))
    client.post("/api/tasks", json=task_payload(employee["id"], dueDate="2026-05-01"))

    resp = client.get("/api/reports/tasks?fromDate=2026-02-01&toDate=2026-03-31")
    assert resp.status_code == 200
    assert [t["dueDate"] for t in resp.get_json()] == ["2026-03-01"]

    assert client.get("/api/reports/tasks?fromDate=2026-04-01&toDate=2026-03-01").status_code == 400
    assert client.get("/api/reports/payments").get_json() == []

    employees = client.get("/api/reports/employees").get_json()
    assert employees[0]["taskCount"] == 2
    assert employees[0]["paymentCount"] == 0


def test_csv_export(client, employee):
    client.post("/api/tasks", json=task_payload(employee["id"]))

    resp = client.get("/api/reports/tasks.csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment; filename=task_report_" in resp.headers["Content-Disposition"]
    text = resp.data.decode("utf-8-sig")
    lines = text.splitlines()
    assert lines[0].startswith("id,customerName,customerContact")
    assert "Acme Retail" in lines[1]
    assert "Alice" in lines[1]

    payments = client.get("/api/reports/payments.csv")
    assert payments.data.decode("utf-8-sig").splitlines() == [
        "id,taskId,customerName,assignedTo,amountDue,dueDate,status,collectedAmount,collectedOn"
    ]


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_database_unavailable_is_503(client, container, monkeypatch):
    def boom():
        raise PersistenceUnavailable("Database unavailable: gone")

    monkeypatch.setattr(container.task_service, "list", boom)

    resp = client.get("/api/tasks")

    assert resp.status_code == 503
    assert resp.get_json() == {"error": "Database unavailable"}


def test_unexpected_error_is_500(client, container, monkeypatch):
    def boom():
        raise RuntimeError("kaput")

    monkeypatch.setattr(container.payment_service, "list", boom)

    resp = client.get("/api/payments")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_over_length_fields_are_400(client, employee):
    resp = client.post("/api/tasks", json=task_payload(employee["id"], customerName="x" * 200))
    assert resp.status_code == 400
    assert "customerName" in resp.get_json()["error"]

    resp = client.post("/api/employees", json={"employeeId": "E" * 65, "name": "Long", "password": "secret123"})
    assert resp.status_code == 400

    task = client.post("/api/tasks", json=task_payload(employee["id"])).get_json()
    resp = client.post(
        "/api/payments",
        json={"taskId": task["id"], "assignedTo": employee["id"], "amountDue": 1e10, "dueDate": "2026-03-31"},
    )
    assert resp.status_code == 400


class _StrictModeCursor:
    """Rejects every write the way strict-mode MySQL rejects a too-long value."""

    def execute(self, sql, params=()):
        raise mysql_errors.DataError(msg="Data too long for column 'description' at row 1", errno=1406)

    def close(self):
        pass


class _StrictModeConn:
    def cursor(self, dictionary=True):
        return _StrictModeCursor()

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class _StrictModeHandle:
    state = ConnectionState.CONNECTED

    def connect(self):
        return _StrictModeConn()

    def refresh_state(self):
        return self.state


def test_database_data_error_is_400(repos):
    container = assemble(
        FakeConnection(),
        employees_repo=repos.employees,
        tasks_repo=MySQLTaskRepository(_StrictModeHandle()),
        payments_repo=repos.payments,
    )
    client = create_app(settings_module="config.testing", container=container).test_client()
    emp = container.employee_service.create({"employeeId": "E001", "name": "Alice", "password": "secret123"})

    resp = client.post("/api/tasks", json=task_payload(emp["id"], description="x" * 70000))

    assert resp.status_code == 400
    assert "Data too long" in resp.get_json()["error"]


def test_cors_allows_configured_origin(client):
    resp = client.get("/api/employees", headers={"Origin": "http://localhost:5173"})

    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_cors_preflight_and_unknown_origin(client):
    preflight = client.options(
        "/api/tasks",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert preflight.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"

    other = client.get("/api/employees", headers={"Origin": "http://evil.example"})
    assert "Access-Control-Allow-Origin" not in other.headers
