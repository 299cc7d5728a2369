import os

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": "salary_management_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Cheap hashing keeps the suite fast
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"

STATIC_DIR = None

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
