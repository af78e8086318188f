"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from flask import Flask, jsonify

from .error_handlers import AuthenticationError
from .extensions import csrf_protect, db, login_manager
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Attach console (and optional rotating file) handlers to ``app.logger``."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
    )
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)
    csrf_protect.init_app(app)


def register_user_loader(app: Flask) -> None:
    """Wire flask-login to the ``users`` table."""

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        error = AuthenticationError()
        return jsonify(error.to_dict()), error.status_code


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables."""

    from .. import models  # noqa: F401  (registers the mappers)

    db.create_all()
    app.logger.info("Database ready at %s", app.config["SQLALCHEMY_DATABASE_URI"])

    if app.config.get("STATIC_EXPORT"):
        app.logger.info("Static export build: account features are disabled.")
