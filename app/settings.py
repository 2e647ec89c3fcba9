# app/settings.py
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{PROJECT_ROOT / 'values.sqlite3'}")

# Seed a few values on an empty table at startup
SEED_DEMO_VALUES = os.getenv("SEED_DEMO_VALUES", "true").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# List page size bounds
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 500
