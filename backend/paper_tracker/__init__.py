"""Application factory and blueprint registration."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from .config import BaseConfig
from .db.session import db
from .api.health.routes import bp as health_bp
from .api.papers.routes import bp as papers_bp
from .docs.routes import bp as docs_bp
from .errors import register_error_handlers
from .integrations.mail_client import mail_ext
from .integrations.supabase_client import supabase_ext
from .utils.log import configure_logging


def create_app(config_class: type[BaseConfig] | BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    config = config_class or BaseConfig
    app.config.from_object(config() if isinstance(config, type) else config)

    if not app.config.get("TESTING"):
        configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    CORS(app, resources={r"/api/*": {"origins": origins or "*"}})

    # Init extensions
    db.init_app(app)
    supabase_ext.init_app(app)
    mail_ext.init_app(app)

    if app.config.get("TESTING") and app.config.get("PAPER_REPO_BACKEND", "sqlalchemy") == "sqlalchemy":
        db.create_all()

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/api/health")
    app.register_blueprint(papers_bp, url_prefix="/api/papers")
    app.register_blueprint(docs_bp)

    # Global error handlers
    register_error_handlers(app)
    return app
