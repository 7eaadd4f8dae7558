"""Marshmallow schemas for serialization and validation."""

from taskapi.schemas.task import TaskPayloadSchema, TaskSchema


__all__ = ["TaskSchema", "TaskPayloadSchema"]
