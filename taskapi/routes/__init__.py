"""API route blueprints."""

from taskapi.routes.health import health_bp
from taskapi.routes.tasks import tasks_bp


__all__ = ["health_bp", "tasks_bp"]
