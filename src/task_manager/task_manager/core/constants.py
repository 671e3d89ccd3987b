"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PASSWORD_LENGTH = 6
PASSWORD_HASH_METHOD = "scrypt"
DEFAULT_DB_PORT = 3306
MYSQL_DUPLICATE_KEY = 1062

# Column sizes in database/schema.sql
MAX_EMPLOYEE_ID_LENGTH = 64
MAX_TEXT_LENGTH = 150
# DECIMAL(12, 2)
MAX_AMOUNT = "9999999999.99"
