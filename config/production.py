import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_hr"),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None

REPORT_BATCH_SIZE = int(os.getenv("REPORT_BATCH_SIZE", "20"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Override for the schema applied by AUTO_INIT_DB; defaults to the copy shipped in the package
SCHEMA_PATH = os.getenv("SCHEMA_PATH") or None
