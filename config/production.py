import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dispatch_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

EXTRA_HOLIDAYS = os.getenv("EXTRA_HOLIDAYS", "")
# Treat the built-in Korean public holidays as non-working days (default: Sunday only)
PUBLIC_HOLIDAYS_OFF = bool(int(os.getenv("PUBLIC_HOLIDAYS_OFF", "0")))
DISPATCH_WORKERS = int(os.getenv("DISPATCH_WORKERS", "4"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
