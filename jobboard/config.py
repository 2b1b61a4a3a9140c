# jobboard/config.py
import os
from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

def _as_bool(val: str | None, default=False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}

def _as_float(val: str | None) -> float | None:
    if val is None or not str(val).strip():
        return None
    return float(val)

class Config:
    # --- Core ---
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    BABEL_DEFAULT_LOCALE = os.getenv("BABEL_DEFAULT_LOCALE", "en")
    BABEL_DEFAULT_TIMEZONE = os.getenv("BABEL_DEFAULT_TIMEZONE", "UTC")

    # Fail at startup instead of per request when a component is missing settings
    STRICT_SETTINGS = _as_bool(os.getenv("STRICT_SETTINGS", "0"))

    # DB
    SQLALCHEMY_DATABASE_URI = (
        os.getenv("SQLALCHEMY_DATABASE_URI")
        or os.getenv("DATABASE_URL")
        or "sqlite:///jobboard.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CSRF
    WTF_CSRF_TIME_LIMIT = None

    # --- Admin gate (UI convenience only) ---
    ADMIN_SECRET = os.getenv("ADMIN_SECRET", "")

    # --- Handlers ---
    # e.g. "https://jobs.example.com" when the handlers run in this same app
    FUNCTION_BASE = os.getenv("FUNCTION_BASE", "")
    FUNCTION_TIMEOUT = _as_float(os.getenv("FUNCTION_TIMEOUT"))
    SIGNED_URL_EXPIRES = int(os.getenv("SIGNED_URL_EXPIRES", "120"))

    # --- Object storage ---
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "resumes")
    STORAGE_URL = os.getenv("STORAGE_URL", "")              # base of minted URLs, e.g. "https://jobs.example.com/storage"
    STORAGE_SERVICE_KEY = os.getenv("STORAGE_SERVICE_KEY", "")
    STORAGE_ROOT = os.getenv("STORAGE_ROOT")                # defaults to <instance>/storage
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(20 * 1024 * 1024)))  # 20MB

    # --- Mail (SendGrid SMTP relay by default) ---
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.sendgrid.net")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = _as_bool(os.getenv("MAIL_USE_TLS", "1"))
    MAIL_USE_SSL = _as_bool(os.getenv("MAIL_USE_SSL", "0"))  # don't enable together with TLS
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "apikey")
    MAIL_PASSWORD = os.getenv("SENDGRID_API_KEY") or os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("EMAIL_FROM") or os.getenv("MAIL_DEFAULT_SENDER")
    MAIL_SUPPRESS_SEND = _as_bool(os.getenv("MAIL_SUPPRESS_SEND", "0"))
    APPLICATION_EMAIL_TO = os.getenv("EMAIL_TO", "")

    # --- Logging ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_FILENAME = os.getenv("LOG_FILENAME", "jobboard.log")
    LOG_JSON = _as_bool(os.getenv("LOG_JSON", "0"))

    # --- Sentry ---
    SENTRY_DSN = os.getenv("SENTRY_DSN", "")
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))

    # --- Security cookies (recommended for prod) ---
    SESSION_COOKIE_SECURE = _as_bool(os.getenv("SESSION_COOKIE_SECURE", "1"))
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")


# Settings each component cannot run without
REQUIRED_SETTINGS = {
    "client": ("STORAGE_BUCKET", "ADMIN_SECRET", "FUNCTION_BASE"),
    "signed_url": ("STORAGE_URL", "STORAGE_SERVICE_KEY", "STORAGE_BUCKET"),
    "notification": ("MAIL_PASSWORD", "MAIL_DEFAULT_SENDER", "APPLICATION_EMAIL_TO"),
}

MISSING_MESSAGES = {
    "signed_url": "Missing STORAGE_URL, STORAGE_SERVICE_KEY or STORAGE_BUCKET",
    "notification": "Missing email configuration in function secrets",
}


def missing_settings(config, component: str) -> list[str]:
    return [key for key in REQUIRED_SETTINGS[component] if not config.get(key)]


def require_settings(config, component: str) -> None:
    missing = missing_settings(config, component)
    if missing:
        message = MISSING_MESSAGES.get(component) or f"Missing {', '.join(missing)}"
        raise ConfigurationError(message)
