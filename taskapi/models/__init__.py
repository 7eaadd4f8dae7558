"""Domain models."""

from taskapi.models.task import Task


__all__ = ["Task"]
