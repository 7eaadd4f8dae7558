"""Exceptions raised by task operations."""

from typing import Any


class TaskServiceError(Exception):
    """Base class for errors surfaced by task operations."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(TaskServiceError):
    """Malformed request body or identifier."""

    status_code = 400


class NotFound(TaskServiceError):
    """No task matches the given identifier."""

    status_code = 404


class StoreError(TaskServiceError):
    """The persistence backend failed or rejected the operation."""

    status_code = 500
