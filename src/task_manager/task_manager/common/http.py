from __future__ import annotations

import csv
import io
import logging
from typing import Any, Sequence

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, NotFoundError, PersistenceUnavailable, ValidationError

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def csv_response(app: Flask, *, rows: Sequence[dict], fieldnames: Sequence[str], filename: str):
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)

    return app.response_class(
        out.getvalue().encode("utf-8-sig"),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return jsonify({"error": str(e)}), 401

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(PersistenceUnavailable)
    def _unavailable(e: PersistenceUnavailable):
        logger.warning("request failed, database unavailable: %s", e)
        return jsonify({"error": "Database unavailable"}), 503

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return jsonify({"error": str(e)}), 500
        return jsonify({"error": "Internal server error"}), 500
