from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_admin, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .employees.controller import register as register_employees
from .logging_setup import setup_logging
from .payments.controller import register as register_payments
from .reports.controller import register as register_reports
from .tasks.controller import register as register_tasks

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def register_health(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"message": "API is running now", "dbStatus": container.conn.refresh_state().value})


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    """Application factory.

    A prebuilt ``container`` skips all database setup (used by tests).
    """

    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    CORS(app, resources={r"/api/*": {"origins": list(getattr(settings, "CORS_ORIGINS", ["*"]))}})

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_admin(db_config)

        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        # Fatal at startup: PersistenceUnavailable propagates out of the factory.
        conn.open()
        atexit.register(conn.close)
        container = build_container(conn, settings=settings)

    register_error_handlers(app)
    register_health(app, container)
    register_employees(app, container)
    register_tasks(app, container)
    register_payments(app, container)
    register_reports(app, container)

    app.extensions["task_manager"] = container
    return app
