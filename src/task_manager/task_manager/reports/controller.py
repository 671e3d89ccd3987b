from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import csv_response
from ..container import Container
from .service import PAYMENT_CSV_FIELDS, TASK_CSV_FIELDS


def register(app: Flask, container: Container) -> None:
    def _filename(prefix: str) -> str:
        return f"{prefix}_{now_local().strftime('%Y%m%d')}.csv"

    @app.route("/api/reports/tasks", methods=["GET"], endpoint="task_report")
    def task_report():
        return jsonify(container.report_service.task_report(request.args))

    @app.route("/api/reports/payments", methods=["GET"], endpoint="payment_report")
    def payment_report():
        return jsonify(container.report_service.payment_report(request.args))

    @app.route("/api/reports/employees", methods=["GET"], endpoint="employee_report")
    def employee_report():
        return jsonify(container.report_service.employee_report())

    @app.route("/api/reports/tasks.csv", methods=["GET"], endpoint="task_report_csv")
    def task_report_csv():
        rows = container.report_service.task_report_rows(request.args)
        return csv_response(app, rows=rows, fieldnames=TASK_CSV_FIELDS, filename=_filename("task_report"))

    @app.route("/api/reports/payments.csv", methods=["GET"], endpoint="payment_report_csv")
    def payment_report_csv():
        rows = container.report_service.payment_report_rows(request.args)
        return csv_response(app, rows=rows, fieldnames=PAYMENT_CSV_FIELDS, filename=_filename("payment_report"))
