import os
from pathlib import Path
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, request, has_request_context
from .extensions import db, migrate, csrf, mail, babel
from .config import Config, REQUIRED_SETTINGS, missing_settings
from flask_babel import get_locale

# Blueprints
from .blueprints.errors import errors_bp
from .blueprints.main import main_bp
from .blueprints.admin import admin_bp
from .blueprints.functions import functions_bp
from .blueprints.storage import storage_bp


# Optional: Sentry
def _init_sentry(app):
    dsn = app.config.get("SENTRY_DSN")
    if not dsn:
        return
    try:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration(), SqlalchemyIntegration()],
            traces_sample_rate=app.config.get("SENTRY_TRACES_SAMPLE_RATE", 0.0),
            environment=os.getenv("ENV", "development"),
            release=os.getenv("GIT_COMMIT", None),
            send_default_pii=False,
        )
        app.logger.info("Sentry initialized.")
    except Exception as e:
        app.logger.warning(f"Sentry init failed: {e}")

def _init_logging(app):
    # Base level
    level_name = app.config.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    app.logger.setLevel(level)

    # Ensure log dir exists
    log_dir = Path(app.config.get("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / app.config.get("LOG_FILENAME", "jobboard.log")

    # Formatter: text or JSON
    if app.config.get("LOG_JSON", False):
        import json_log_formatter
        formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")

    # one create_app per process in prod, many in tests: don't stack handlers
    for old in list(app.logger.handlers):
        app.logger.removeHandler(old)
        old.close()

    # Rotating file handler (5MB x 5)
    file_handler = RotatingFileHandler(
        log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    app.logger.addHandler(file_handler)

    # Stream to stdout as well (useful on dev/heroku/docker)
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    app.logger.addHandler(stream_handler)

    app.logger.info("Logging initialized.")

def _check_settings(app):
    gaps = {name: missing_settings(app.config, name) for name in REQUIRED_SETTINGS}
    gaps = {name: keys for name, keys in gaps.items() if keys}
    for name, keys in gaps.items():
        app.logger.warning("Settings missing for %s: %s", name, ", ".join(keys))
    if gaps and app.config.get("STRICT_SETTINGS"):
        raise RuntimeError(f"Missing required settings: {gaps}")

def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)
    app.config.from_pyfile("config.py", silent=True)

    # ensure instance & storage
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)
    app.config.setdefault("LANGUAGES", ["en"])
    if not app.config.get("STORAGE_ROOT"):
        app.config["STORAGE_ROOT"] = str(Path(app.instance_path) / "storage")
    Path(app.config["STORAGE_ROOT"]).mkdir(parents=True, exist_ok=True)

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    mail.init_app(app)

    # ---- Babel init (locale from Accept-Language) ----
    def _select_locale():
        if not has_request_context():
            return app.config.get("BABEL_DEFAULT_LOCALE") or "en"
        return request.accept_languages.best_match(app.config.get("LANGUAGES", ["en"])) or "en"
    babel.init_app(app, locale_selector=_select_locale)

    @app.context_processor
    def inject_i18n_helpers():
        def _safe_get_locale():
            # get_locale() can return None early in the request
            loc = get_locale()
            return str(loc) if loc else "en"
        return {"get_locale": _safe_get_locale}

    # Logging must come before blueprints so errors during register are captured
    _init_logging(app)
    _init_sentry(app)
    _check_settings(app)

    # Blueprints
    app.register_blueprint(errors_bp)  # error handlers
    app.register_blueprint(main_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(functions_bp)
    app.register_blueprint(storage_bp)

    return app
