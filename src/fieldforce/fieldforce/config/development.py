import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# mysql | memory
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "fieldforce_db"),
}

ASSET_ROOT = os.getenv("ASSET_ROOT", "instance/assets")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEFAULT_SALES_TARGET = int(os.getenv("DEFAULT_SALES_TARGET", "1000"))
SELFIE_RETENTION_DAYS = int(os.getenv("SELFIE_RETENTION_DAYS", "3"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
