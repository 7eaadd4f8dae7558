"""Health check endpoint."""

from typing import Any

from flask import Blueprint, current_app, jsonify


health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint for monitoring.

    Returns:
        JSON response with health status of the task store.
    """
    store_ok = current_app.extensions["task_store"].ping()

    health_status: dict[str, Any] = {
        "status": "healthy" if store_ok else "unhealthy",
        "components": {
            "store": "healthy" if store_ok else "unhealthy",
        },
        "service": {
            "name": "taskapi",
            "version": "1.0.0",
        },
    }

    status_code = 200 if store_ok else 503
    return jsonify(health_status), status_code
