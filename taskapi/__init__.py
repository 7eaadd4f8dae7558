"""Flask application factory for the task service."""

import logging

from flask import Flask

from taskapi.services import TaskService
from taskapi.store import InMemoryTaskStore, SQLAlchemyTaskStore, TaskStore, create_store_engine
from taskapi.telemetry import instrument_app, setup_telemetry, telemetry_enabled


def create_app(config_class: type | None = None, store: TaskStore | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use. Defaults to Config.
        store: Prebuilt task store. Built from configuration when omitted.

    Returns:
        Configured Flask application instance.
    """
    # Initialize telemetry BEFORE creating Flask app
    if telemetry_enabled():
        setup_telemetry()

    app = Flask(__name__)

    # Load configuration
    if config_class is None:
        from taskapi.config import Config

        config_class = Config
    app.config.from_object(config_class)

    # One store per app, shared by every request and closed at shutdown
    if store is None:
        store = build_store(app.config)
    store.create_schema()
    app.extensions["task_store"] = store
    app.extensions["task_service"] = TaskService(store, allowed_statuses=app.config.get("TASK_STATUSES"))

    if telemetry_enabled():
        instrument_app(app)

    # Register blueprints
    from taskapi.routes.health import health_bp
    from taskapi.routes.tasks import tasks_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(tasks_bp)

    # Register error handlers
    from taskapi.errors import register_error_handlers

    register_error_handlers(app)

    # Register metrics middleware
    if telemetry_enabled():
        from taskapi.middleware.metrics import register_metrics_middleware

        register_metrics_middleware(app)

    _configure_logging()

    return app


def build_store(config) -> TaskStore:
    """Build the task store selected by configuration.

    Args:
        config: Flask config mapping.

    Returns:
        Task store instance.
    """
    backend = config.get("TASK_STORE_BACKEND", "sqlalchemy")
    if backend == "memory":
        return InMemoryTaskStore()
    if backend == "sqlalchemy":
        engine = create_store_engine(
            config["DATABASE_URL"],
            timeout=config.get("STORE_TIMEOUT_SECONDS"),
            **config.get("STORE_ENGINE_OPTIONS", {}),
        )
        return SQLAlchemyTaskStore(engine)
    raise ValueError(f"Unknown task store backend: {backend}")


def _configure_logging() -> None:
    """Configure logging for the application."""
    # App loggers - propagate to root (where OTel handler is)
    logging.getLogger("taskapi").setLevel(logging.DEBUG)
    logging.getLogger("taskapi").propagate = True

    # Reduce noise from framework loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
