import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "salary_management"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

TOKEN_TTL_SECONDS = int(os.getenv("TOKEN_TTL_SECONDS", str(24 * 60 * 60)))

STATIC_DIR = os.getenv("STATIC_DIR", "public")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
