"""Error handlers with OpenTelemetry trace context."""

import logging
from typing import Any

from flask import Flask, jsonify
from opentelemetry import trace
from werkzeug.exceptions import HTTPException

from taskapi.exceptions import StoreError, TaskServiceError


logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int, details: dict[str, Any] | None = None) -> tuple:
    """Create error response with trace context.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional per-field messages.

    Returns:
        Tuple of (response, status_code).
    """
    response: dict[str, Any] = {
        "error": message,
        "status": status_code,
    }
    if details:
        response["details"] = details

    # Add trace ID for debugging
    span = trace.get_current_span()
    span_context = span.get_span_context()
    if span_context.is_valid:
        response["trace_id"] = format(span_context.trace_id, "032x")

    return jsonify(response), status_code


def register_error_handlers(app: Flask) -> None:
    """Register error handlers on Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(TaskServiceError)
    def task_service_error(error: TaskServiceError):
        if isinstance(error, StoreError):
            # Driver details stay in the log, the client only sees the message
            logger.error(f"Store failure: {error.message}", exc_info=error.__cause__ or error)
        return error_response(error.message, error.status_code, error.details)

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return error_response(error.name, error.code or 500)

    @app.errorhandler(500)
    def internal_error(error):
        return error_response("Internal server error", 500)
