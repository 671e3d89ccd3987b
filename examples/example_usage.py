"""Example: use the service layer directly, without Flask."""

import importlib

from config import get_settings_module

from src.task_manager.task_manager.container import build_container
from src.task_manager.task_manager.database.connection import DatabaseConnection, DBConfig


def main():
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    conn.open()
    try:
        container = build_container(conn, settings=settings)
        for row in container.report_service.employee_report():
            print(row["employeeId"], row["name"], row["taskCount"], row["paymentCount"])
    finally:
        conn.close()


if __name__ == "__main__":
    main()
