from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    def create_task():
        return jsonify(container.task_service.create(json_body())), 201

    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    def list_tasks():
        return jsonify(container.task_service.list())

    @app.route("/api/tasks/<int:task_id>", methods=["GET"], endpoint="get_task")
    def get_task(task_id: int):
        return jsonify(container.task_service.get(task_id))

    @app.route("/api/tasks/<int:task_id>", methods=["PUT"], endpoint="update_task")
    def update_task(task_id: int):
        return jsonify(container.task_service.update(task_id, json_body()))

    @app.route("/api/tasks/<int:task_id>/steps", methods=["POST"], endpoint="complete_task_step")
    def complete_task_step(task_id: int):
        return jsonify(container.task_service.complete_step(task_id, json_body()))

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"], endpoint="delete_task")
    def delete_task(task_id: int):
        container.task_service.delete(task_id)
        return jsonify({"message": "Task deleted successfully"})
