from __future__ import annotations

from datetime import datetime

import pytest

from src.task_manager.task_manager.core.exceptions import ValidationError
from src.task_manager.task_manager.tasks.model import StepRecord
from src.task_manager.task_manager.tasks.workflow import TaskWorkflow

from ..fakes import task_payload


@pytest.fixture()
def workflow_container(make_container):
    return make_container(workflow=TaskWorkflow(["survey", "install", "handover"]))


def test_from_settings():
    assert TaskWorkflow.from_settings("") is None
    assert TaskWorkflow.from_settings(" , ") is None
    assert TaskWorkflow.from_settings("survey, install").steps == ("survey", "install")
    assert TaskWorkflow.from_settings(["a", "b"]).steps == ("a", "b")

    with pytest.raises(ValueError):
        TaskWorkflow(["a", "a"])


def test_new_task_starts_at_first_step(workflow_container):
    emp = workflow_container.employee_service.create({"employeeId": "W1", "name": "Wes", "password": "secret123"})

    task = workflow_container.task_service.create(task_payload(emp["id"]))

    assert task["currentStep"] == "survey"


def test_steps_must_follow_workflow_order(workflow_container):
    emp = workflow_container.employee_service.create({"employeeId": "W1", "name": "Wes", "password": "secret123"})
    task = workflow_container.task_service.create(task_payload(emp["id"]))
    svc = workflow_container.task_service

    with pytest.raises(ValidationError):
        svc.complete_step(task["id"], {"stepName": "install", "completedBy": emp["id"]})
    with pytest.raises(ValidationError):
        svc.complete_step(task["id"], {"stepName": "coffee", "completedBy": emp["id"]})

    after_first = svc.complete_step(task["id"], {"stepName": "survey", "completedBy": emp["id"]})
    assert after_first["currentStep"] == "install"
    assert after_first["status"] == "pending"

    svc.complete_step(task["id"], {"stepName": "install", "completedBy": emp["id"], "status": "in-progress"})
    done = svc.complete_step(task["id"], {"stepName": "handover", "completedBy": emp["id"]})

    assert [s["stepName"] for s in done["completedSteps"]] == ["survey", "install", "handover"]
    assert done["status"] == "completed"

    with pytest.raises(ValidationError):
        svc.complete_step(task["id"], {"stepName": "handover", "completedBy": emp["id"]})


def test_concurrent_completion_is_rejected(workflow_container, repos):
    emp = workflow_container.employee_service.create({"employeeId": "W1", "name": "Wes", "password": "secret123"})
    task = workflow_container.task_service.create(task_payload(emp["id"]))

    # Another writer appends between our read and our append.
    original_get = repos.tasks.get_by_id
    raced = {"done": False}

    def racing_get(id):
        current = original_get(id)
        if not raced["done"]:
            raced["done"] = True

            repos.tasks.append_step(id, StepRecord("survey", emp["id"], None, datetime(2026, 3, 1)))
        return current

    repos.tasks.get_by_id = racing_get

    with pytest.raises(ValidationError):
        workflow_container.task_service.complete_step(task["id"], {"stepName": "survey", "completedBy": emp["id"]})

    assert len(original_get(task["id"]).completed_steps) == 1
