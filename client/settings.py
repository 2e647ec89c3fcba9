# client/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# Empty base URL means same-origin relative paths.
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_TOKEN = os.getenv("API_TOKEN") or None
API_TOKEN_TYPE = os.getenv("API_TOKEN_TYPE", "Bearer")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "30"))

VALUES_PATH = os.getenv("VALUES_PATH", "/webknot-values")

CSRF_COOKIE_NAME = os.getenv("CSRF_COOKIE_NAME", "XSRF-TOKEN")
CSRF_HEADER_NAME = os.getenv("CSRF_HEADER_NAME", "X-XSRF-TOKEN")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
