import os
from dotenv import load_dotenv

load_dotenv()

SERVICE_NAME = os.getenv("SERVICE_NAME", "order_service")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost") # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "orders")

# DATABASE_URL wins over the POSTGRES_* parts (tests point it at SQLite)
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Outbound integration. Empty URL disables the webhook entirely.
WEBHOOK_URL = os.getenv("WEBHOOK_URL", "") or None
WEBHOOK_TIMEOUT = float(os.getenv("WEBHOOK_TIMEOUT", "5.0"))

# Background jobs
JOB_MAX_TRIES = int(os.getenv("JOB_MAX_TRIES", "3"))
JOB_BACKOFF_SECONDS = float(os.getenv("JOB_BACKOFF_SECONDS", "5"))
JOB_WORKERS = int(os.getenv("JOB_WORKERS", "2"))

# Tracing export is skipped when unset
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "")
