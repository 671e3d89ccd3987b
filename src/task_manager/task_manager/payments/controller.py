from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["POST"], endpoint="create_payment")
    def create_payment():
        return jsonify(container.payment_service.create(json_body())), 201

    @app.route("/api/payments", methods=["GET"], endpoint="list_payments")
    def list_payments():
        return jsonify(container.payment_service.list())

    @app.route("/api/payments/<int:payment_id>", methods=["GET"], endpoint="get_payment")
    def get_payment(payment_id: int):
        return jsonify(container.payment_service.get(payment_id))

    @app.route("/api/payments/<int:payment_id>", methods=["PUT"], endpoint="update_payment")
    def update_payment(payment_id: int):
        return jsonify(container.payment_service.update(payment_id, json_body()))

    @app.route("/api/payments/<int:payment_id>", methods=["DELETE"], endpoint="delete_payment")
    def delete_payment(payment_id: int):
        container.payment_service.delete(payment_id)
        return jsonify({"message": "Payment deleted successfully"})
