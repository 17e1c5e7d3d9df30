# flatdesk/__init__.py
from __future__ import annotations

import logging
import os
from typing import Any, Optional

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .errors import register_error_handlers
from .extensions import db, jwt, migrate


# --- Config ------------------------------------------------------------------
def _get_allowed_origins() -> list[str]:
    """Allowed CORS origins from env plus the local dev servers."""
    default = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    # Support comma-separated list in env
    extra = os.getenv("CORS_ALLOWED_ORIGINS", "")
    extra_list = [o.strip() for o in extra.split(",") if o.strip()]
    return sorted(set(default + extra_list))


def _load_config(app: Flask, config_object: Optional[str | Any]) -> None:
    if config_object is None:
        config_object = os.getenv("CONFIG_CLASS", "flatdesk.config.Config")

    if isinstance(config_object, str):
        # load "package.ClassName"
        module, _, cls = config_object.rpartition(".")
        config_object = getattr(__import__(module, fromlist=[cls]), cls)

    validate = getattr(config_object, "validate", None)
    if callable(validate):
        validate()
    app.config.from_object(config_object)
    app.config.setdefault("API_PREFIX", "/api")


def _configure_logging(app: Flask) -> None:
    """JSON logs to stdout."""
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    app.logger.setLevel(level)
    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers in reloaders
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='{"ts":"%(asctime)s","level":"%(levelname)s","msg":"%(message)s","name":"%(name)s"}',
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)


def _configure_cors(app: Flask) -> None:
    CORS(
        app,
        resources={r"/api/*": {"origins": _get_allowed_origins()}},
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        expose_headers=["Content-Type"],
        max_age=86400,
    )


def _configure_proxy(app: Flask) -> None:
    """Respect X-Forwarded-* when running behind a reverse proxy."""
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore


def _init_extensions(app: Flask) -> None:
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)


def _register_blueprints(app: Flask) -> None:
    """Register all API blueprints under the API prefix."""
    from .routes import auth, flats, health, maintenance, payments, tenants

    prefix = app.config["API_PREFIX"]
    app.register_blueprint(auth.bp, url_prefix=prefix + "/auth")
    app.register_blueprint(health.bp, url_prefix=prefix)
    # payment and maintenance routes hang off /flats like the flat routes do
    app.register_blueprint(payments.bp, url_prefix=prefix + "/flats")
    app.register_blueprint(maintenance.bp, url_prefix=prefix + "/flats")
    app.register_blueprint(flats.bp, url_prefix=prefix + "/flats")
    app.register_blueprint(tenants.bp, url_prefix=prefix + "/tenants")
    app.logger.info("Registered %d blueprints under %s", len(app.blueprints), prefix)


# --- Application Factory ------------------------------------------------------
def create_app(config_object: Optional[str | Any] = None) -> Flask:
    """
    Standard Flask application factory.

    `config_object` may be:
      - a config class
      - dotted path to a config class (e.g., "flatdesk.config.ProductionConfig")
      - None (then we'll try CONFIG_CLASS env or default to flatdesk.config.Config)
    """
    app = Flask(__name__)
    _load_config(app, config_object)

    _configure_logging(app)
    _configure_proxy(app)
    _configure_cors(app)

    _init_extensions(app)
    register_error_handlers(app)
    _register_blueprints(app)

    @app.get("/")
    def root():
        return jsonify({"service": "flatdesk", "message": "See /api/health"}), 200

    # Stored flat and maintenance photos
    @app.get("/uploads/<path:filename>")
    def uploaded_file(filename: str):
        return send_from_directory(app.config["UPLOAD_FOLDER"], filename)

    return app
