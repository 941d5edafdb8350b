import os
from dotenv import load_dotenv


load_dotenv()


def _optional_float(name):
    value = os.getenv(name)
    return float(value) if value else None


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5001")
    API_TIMEOUT = _optional_float("API_TIMEOUT")  # None: requests never time out
    PAGE_SIZE = int(os.getenv("PAGE_SIZE", 10))
    # Client-side credential check only; not a security boundary
    LOGIN_USER_ID = os.getenv("LOGIN_USER_ID", "user")
    LOGIN_PASSWORD = os.getenv("LOGIN_PASSWORD", "user123")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    AUDIT_LOG_FILE = os.getenv("AUDIT_LOG_FILE", os.path.join("logs", "audit.log"))
    SESSION_COOKIE_SAMESITE = "Lax"
