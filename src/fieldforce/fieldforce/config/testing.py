import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "fieldforce_test_db"),
}

ASSET_ROOT = os.getenv("ASSET_ROOT", "instance/test-assets")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DEFAULT_SALES_TARGET = 1000
SELFIE_RETENTION_DAYS = 3

AUTO_INIT_DB = False
