import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dispatch_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Extra non-working days on top of the built-in holiday table: "YYYY-MM-DD:name,..."
EXTRA_HOLIDAYS = os.getenv("EXTRA_HOLIDAYS", "")
# Treat the built-in Korean public holidays as non-working days (default: Sunday only)
PUBLIC_HOLIDAYS_OFF = bool(int(os.getenv("PUBLIC_HOLIDAYS_OFF", "0")))

# Thread fan-out for range queries (0/1 = sequential)
DISPATCH_WORKERS = int(os.getenv("DISPATCH_WORKERS", "0"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
