"""Application factory and blueprint registration."""
from __future__ import annotations

import sys

from flask import Flask
from flask_cors import CORS
from loguru import logger

from .config import BaseConfig
from .db.session import db
from .api.auth.routes import bp as auth_bp
from .api.board.routes import bp as board_bp
from .api.health.routes import bp as health_bp
from .docs.routes import bp as docs_bp
from .errors import register_error_handlers
from .integrations.supabase_client import supabase_ext


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def create_app(config_class: type[BaseConfig] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class or BaseConfig())
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    CORS(app, resources={r"/api/*": {"origins": app.config["FRONTEND_ORIGIN"]}})

    # Init extensions
    supabase_ext.init_app(app)
    if app.config.get("FEEDBACK_REPO_BACKEND", "").lower() == "sqlalchemy":
        db.init_app(app)

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/api/health")
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(board_bp)
    app.register_blueprint(docs_bp)

    # Global error handlers
    register_error_handlers(app)
    logger.info("feedboard started with {} backend", app.config.get("FEEDBACK_REPO_BACKEND"))
    return app
