"""Application factory for the ALM settings backend."""
from __future__ import annotations

import time

from flask import Flask
from sqlalchemy.exc import OperationalError

from .config import Config
from .extensions import cors, db, limiter
from .utils.error_handling import register_error_handlers


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application instance."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)

    allowed_origins = [
        origin.strip()
        for origin in (app.config.get("CORS_ALLOWED_ORIGINS") or "").split(",")
        if origin.strip()
    ]
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": allowed_origins}},
        allow_headers=["Content-Type", "Authorization"],
    )

    limiter.init_app(app)
    register_error_handlers(app)

    from .api.alm_settings import bp as alm_settings_bp
    from .api.auth import bp as auth_bp
    from .api.health import bp as health_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(alm_settings_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")

    with app.app_context():
        # Import models to ensure they are registered with SQLAlchemy before creating tables.
        from .models import alm_setting, auth  # noqa: F401

        _initialize_database(app)

    return app


def _initialize_database(app: Flask) -> None:
    """Initialize the database with retry logic to handle delayed availability."""

    max_retries = int(app.config.get("DB_INIT_MAX_RETRIES", 30))
    retry_delay = float(app.config.get("DB_INIT_RETRY_DELAY", 2))

    for attempt in range(1, max_retries + 1):
        try:
            db.create_all()
            return
        except OperationalError as exc:
            if attempt >= max_retries:
                app.logger.exception("Database initialization failed after %s attempts.", attempt)
                raise

            app.logger.warning(
                "Database initialization attempt %s/%s failed: %s", attempt, max_retries, exc
            )
            time.sleep(retry_delay)


__all__ = ["Config", "create_app"]
