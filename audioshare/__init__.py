import os
import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from pathlib import Path
from flask import Flask, redirect, request, session, url_for
from flask_login import current_user
from flask_babel import get_locale
from .extensions import db, migrate, login_manager, csrf, babel
from .config import Config
from .middleware import MethodOverrideMiddleware
from .models.user import User

# Blueprints
from .blueprints.errors import errors_bp
from .blueprints.auth import auth_bp
from .blueprints.main import main_bp
from .blueprints.uploads import uploads_bp


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
            release=app.config.get("APP_VERSION"),
            send_default_pii=False,
        )
        app.logger.info("Sentry initialized.")
    except ImportError as e:
        app.logger.warning(f"Sentry init skipped, sentry-sdk not installed: {e}")

def _init_logging(app):
    level_name = app.config.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    app.logger.setLevel(level)

    log_dir = Path(app.config.get("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / app.config.get("LOG_FILENAME", "audioshare.log")

    # app.logger is shared by name; drop handlers left by an earlier create_app()
    for handler in list(app.logger.handlers):
        app.logger.removeHandler(handler)
        handler.close()

    # Formatter: text or JSON
    if app.config.get("LOG_JSON", False):
        import json_log_formatter
        formatter = json_log_formatter.VerboseJSONFormatter()
    else:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")

    # Rotating file handler (5MB x 5)
    file_handler = RotatingFileHandler(
        log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    app.logger.addHandler(file_handler)

    # Stream to stdout as well (useful on dev/docker)
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    app.logger.addHandler(stream_handler)

    app.logger.info("Logging initialized.")

def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)

    app.config.setdefault("SECRET_KEY", "change-me")
    app.config.setdefault(
        "SQLALCHEMY_DATABASE_URI",
        "sqlite:///" + os.path.join(app.instance_path, "audioshare.db"),
    )
    app.config.setdefault("SQLALCHEMY_TRACK_MODIFICATIONS", False)

    # i18n defaults (Babel)
    app.config.setdefault("BABEL_DEFAULT_LOCALE", "en")
    app.config.setdefault("BABEL_DEFAULT_TIMEZONE", "UTC")
    app.config.setdefault("LANGUAGES", ["en", "fr", "de"])

    app.config.from_pyfile("config.py", silent=True)

    # ensure instance & uploads
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)
    default_upload_dir = Path(app.instance_path) / "uploads"
    app.config.setdefault("UPLOAD_FOLDER", str(default_upload_dir))
    Path(app.config["UPLOAD_FOLDER"]).mkdir(parents=True, exist_ok=True)

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    def _select_locale():
        return (
            session.get("lang")
            or request.accept_languages.best_match(app.config.get("LANGUAGES", ["en"]))
            or "en"
        )
    babel.init_app(app, locale_selector=_select_locale)

    @app.context_processor
    def inject_i18n_helpers():
        def _safe_get_locale():
            # get_locale() can return None early in the request
            loc = get_locale()
            return str(loc) if loc else "en"
        return {"get_locale": _safe_get_locale}

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    login_manager.login_view = "auth.login"
    login_manager.login_message = None

    @app.context_processor
    def inject_now():
        return {"now": datetime.utcnow}

    # Logging must come before blueprints so errors during register are captured
    _init_logging(app)
    _init_sentry(app)

    # Blueprints
    app.register_blueprint(errors_bp)  # error handlers
    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    app.register_blueprint(uploads_bp, url_prefix="/upload")

    @app.route("/")
    def index():
        if current_user.is_authenticated:
            return redirect(url_for("main.dashboard"))
        return redirect(url_for("auth.login"))

    # HTML forms only speak GET/POST
    app.wsgi_app = MethodOverrideMiddleware(app.wsgi_app)

    return app
