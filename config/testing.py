import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_analytics_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

API_TOKEN = ""

ELIGIBLE_LOCATIONS = ("Delhi",)
MAX_RECONCILIATION_SPAN_DAYS = None
RECONCILIATION_PAGE_SIZE = 1000

AUTO_INIT_DB = False
