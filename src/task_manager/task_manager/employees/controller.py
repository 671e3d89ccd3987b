from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        employee = container.auth_service.authenticate(body.get("employeeId"), body.get("password"))
        return jsonify({"message": "Login successful", "employee": employee})

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        return jsonify(container.employee_service.create(json_body())), 201

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        return jsonify(container.employee_service.list())

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        return jsonify(container.employee_service.get(employee_id))

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: int):
        return jsonify(container.employee_service.update(employee_id, json_body()))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        container.employee_service.delete(employee_id)
        return jsonify({"message": "Employee deleted successfully"})
