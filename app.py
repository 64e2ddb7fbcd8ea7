from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from flask import Flask, jsonify
from flask_cors import CORS
from pymongo.errors import PyMongoError

from config import Settings, get_settings, load_env
from db import COLLECTIONS, MarketplaceStore
from utils.errors import register_error_handlers
from utils.passwords import PasswordHasher
from utils.tokens import TokenService

# Import route blueprints
from routes import auth_bp, products_bp, categories_bp, orders_bp, dashboard_bp


def _configure_logging(app: Flask, settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def init_database(app: Flask, store: MarketplaceStore) -> None:
    """Store collections in app config for routes to access"""
    for name in COLLECTIONS:
        app.config[f"db_{name}"] = store.collection(name)

    if not store.enabled:
        app.logger.warning("MongoDB URI not configured - marketplace features will be disabled")
        return

    try:
        store.ensure_indexes()
        app.logger.info("MongoDB collections initialized")
    except PyMongoError as e:
        app.logger.error("Failed to create MongoDB indexes: %s", e)


def create_app(settings: Settings | None = None, database: Any = None) -> Flask:
    """
    Build the Flask app.

    ``database`` may be a ready database handle (e.g. mongomock in tests);
    otherwise one is opened from ``settings.mongodb_uri``.
    """
    if settings is None:
        load_env()
        settings = get_settings()

    app = Flask(__name__)
    app.config["settings"] = settings
    _configure_logging(app, settings)

    origins = "*" if "*" in settings.cors_origins else list(settings.cors_origins)
    CORS(app, resources={
        r"/api/*": {
            "origins": origins,
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
            "allow_headers": ["Content-Type", "Authorization", "Accept"],
            "max_age": 3600,
        }
    })

    store = MarketplaceStore(settings.mongodb_uri, settings.mongodb_db, database=database)
    app.config["store"] = store
    init_database(app, store)

    app.config["token_service"] = TokenService.from_settings(settings)
    app.config["password_hasher"] = PasswordHasher(rounds=settings.bcrypt_rounds)

    register_error_handlers(app)

    # Register route blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(dashboard_bp)

    @app.get("/")
    def index():
        return jsonify({"ok": True, "message": "API is running..."})

    @app.get("/health")
    def health():
        db_status = store.status()
        return jsonify(
            {
                "ok": True,
                "time": datetime.now(timezone.utc).isoformat(),
                "db": {"enabled": db_status.enabled, "ok": db_status.ok, "message": db_status.message},
            }
        )

    return app


if __name__ == "__main__":
    app = create_app()
    settings = app.config["settings"]
    app.logger.info("Marketplace API starting on http://%s:%s", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)
