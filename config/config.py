"""Settings shared by every environment module."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, password_default: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", password_default),
        "database": os.getenv("DB_NAME", "task_manager"),
        "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "30")),
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Ordered step names, comma separated. Empty: any step name is accepted.
TASK_WORKFLOW_STEPS = os.getenv("TASK_WORKFLOW_STEPS", "")

# keep | restrict | cascade
DELETE_POLICY_TASK_ASSIGNEE = os.getenv("DELETE_POLICY_TASK_ASSIGNEE", "keep")
DELETE_POLICY_PAYMENT_ASSIGNEE = os.getenv("DELETE_POLICY_PAYMENT_ASSIGNEE", "keep")
DELETE_POLICY_PAYMENT_TASK = os.getenv("DELETE_POLICY_PAYMENT_TASK", "keep")

# Allowed browser origins for /api, comma separated; "*" allows any origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
