import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timemanager_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

TIMEZONE = os.getenv("TIMEZONE", "Europe/Paris")
LATE_THRESHOLD = os.getenv("LATE_THRESHOLD", "09:05")
LOCK_TIMEOUT_SECONDS = int(os.getenv("LOCK_TIMEOUT_SECONDS", "2"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
