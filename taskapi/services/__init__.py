"""Service modules."""

from taskapi.services.tasks import TaskService


__all__ = ["TaskService"]
