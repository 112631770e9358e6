"""Application configuration and constants."""
import os
from pathlib import Path

# Directory paths
BASE_DIR = Path(__file__).resolve().parent.parent

# Base URL configuration (for running under a subpath like /lms)
# Set via environment variable LMS_BASE_URL, e.g., "lms" or "/lms"
BASE_URL = os.environ.get("LMS_BASE_URL", "").strip("/")
ROOT_PATH = f"/{BASE_URL}" if BASE_URL else ""

# Database
DATABASE_PATH = Path(os.environ.get("LMS_DATABASE_PATH", str(BASE_DIR / "lms.db")))
MIGRATIONS_DIR = Path(os.environ.get("LMS_MIGRATIONS_DIR", str(BASE_DIR / "migrations")))
DB_MAX_CONNECTIONS = int(os.environ.get("LMS_DB_MAX_CONNECTIONS", "10"))

# Token verification (tokens are issued elsewhere, we only decode them)
JWT_SECRET = os.environ.get("LMS_JWT_SECRET", "change-me")
JWT_ALGORITHM = os.environ.get("LMS_JWT_ALGORITHM", "HS256")
AUTH_HEADER_NAME = "Authorization"

# Logging
LOG_LEVEL = os.environ.get("LMS_LOG_LEVEL", "INFO").upper()
