from .config import *  # noqa: F401,F403
from .config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(password_default="12345")

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

LOG_LEVEL = "WARNING"
TASK_WORKFLOW_STEPS = ""
DELETE_POLICY_TASK_ASSIGNEE = "keep"
DELETE_POLICY_PAYMENT_ASSIGNEE = "keep"
DELETE_POLICY_PAYMENT_TASK = "keep"
CORS_ORIGINS = ["http://localhost:5173"]
