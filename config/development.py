import os

from config import env_list, env_optional_int

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_analytics"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Empty API_TOKEN disables the X-API-Token check.
API_TOKEN = os.getenv("API_TOKEN", "")

# Offices with biometric devices; empty value means every location.
ELIGIBLE_LOCATIONS = env_list("ELIGIBLE_LOCATIONS", "Delhi")
# Unset means no upper bound on the reconciliation range.
MAX_RECONCILIATION_SPAN_DAYS = env_optional_int("MAX_RECONCILIATION_SPAN_DAYS")
RECONCILIATION_PAGE_SIZE = int(os.getenv("RECONCILIATION_PAGE_SIZE", "1000"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
