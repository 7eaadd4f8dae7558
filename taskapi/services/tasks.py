"""Task lifecycle operations."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from marshmallow import ValidationError as SchemaValidationError

from taskapi.exceptions import ValidationError
from taskapi.ids import TaskId, format_task_id, new_task_id, parse_task_id
from taskapi.models import Task
from taskapi.schemas import TaskPayloadSchema
from taskapi.store import TaskStore
from taskapi.telemetry import get_meter, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)
meter = get_meter(__name__)

tasks_created = meter.create_counter(
    name="tasks.created",
    description="Tasks created",
    unit="1",
)
tasks_updated = meter.create_counter(
    name="tasks.updated",
    description="Tasks replaced",
    unit="1",
)
tasks_deleted = meter.create_counter(
    name="tasks.deleted",
    description="Tasks deleted",
    unit="1",
)


class TaskService:
    """Create, read, replace, delete and list tasks.

    The service validates input and assigns identity; persistence is
    delegated to the store it was built with. Errors surface as
    ValidationError, NotFound or StoreError.
    """

    def __init__(self, store: TaskStore, allowed_statuses: Iterable[str] | None = None) -> None:
        self.store = store
        self._payload_schema = TaskPayloadSchema(allowed_statuses=allowed_statuses)

    def create(self, payload: Any) -> Task:
        """Validate payload and persist it as a new task.

        Args:
            payload: Decoded request body.

        Returns:
            The stored task, including its assigned id.
        """
        with tracer.start_as_current_span("task.create") as span:
            task = self._parse_payload(payload, new_task_id())
            span.set_attribute("task.id", format_task_id(task.id))

            stored = self.store.insert(task)

            tasks_created.add(1)
            logger.info(f"Task created: {format_task_id(stored.id)}")
            return stored

    def get(self, task_id: str) -> Task:
        """Fetch a task by the wire form of its id."""
        with tracer.start_as_current_span("task.get") as span:
            parsed_id = parse_task_id(task_id)
            span.set_attribute("task.id", task_id)
            return self.store.find_by_id(parsed_id)

    def update(self, task_id: str, payload: Any) -> Task:
        """Replace every mutable field of an existing task.

        Fields missing from payload are stored as their empty defaults.

        Args:
            task_id: Wire form of the task id.
            payload: Decoded request body.

        Returns:
            The replacement task as stored.
        """
        with tracer.start_as_current_span("task.update") as span:
            parsed_id = parse_task_id(task_id)
            span.set_attribute("task.id", task_id)
            replacement = self._parse_payload(payload, parsed_id)

            stored = self.store.update_by_id(parsed_id, replacement)

            tasks_updated.add(1)
            logger.info(f"Task updated: {task_id}")
            return stored

    def delete(self, task_id: str) -> None:
        """Delete a task by the wire form of its id."""
        with tracer.start_as_current_span("task.delete") as span:
            parsed_id = parse_task_id(task_id)
            span.set_attribute("task.id", task_id)

            self.store.delete_by_id(parsed_id)

            tasks_deleted.add(1)
            logger.info(f"Task deleted: {task_id}")

    def list(self) -> list[Task]:
        """Return every stored task."""
        with tracer.start_as_current_span("task.list") as span:
            tasks = self.store.find_all()
            span.set_attribute("task.count", len(tasks))
            return tasks

    def _parse_payload(self, payload: Any, task_id: TaskId) -> Task:
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object")

        try:
            data = self._payload_schema.load(payload)
        except SchemaValidationError as err:
            raise ValidationError("Invalid task payload", details=err.messages) from err

        return Task(id=task_id, **data)
